"""Struct and native function registries.

Both registries are name-keyed lookup tables filled once by the host before
evaluation begins and read-only afterwards. Native functions come from
modules exposing an ordered ``EXPORTS`` list of ``(name, callable)`` pairs;
structs come from providers registering a name with a :class:`Struct`.


File: registry.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from ctlang.nodes import FunctionDef, FunctionHeader

NativeFunction = Callable[[list], object]


def _empty_constructor() -> FunctionDef:
    return FunctionDef(FunctionHeader("constructor", return_type="this"))


@dataclass(frozen=True)
class Struct:
    """
    A host structure: a constructor plus a prototype of named members.
    """
    prototype: Mapping[str, object]
    constructor: FunctionDef = field(default_factory=_empty_constructor)

    def __post_init__(self):
        object.__setattr__(self, "prototype", MappingProxyType(dict(self.prototype)))

    def get(self, name: str):
        """
        Return the member called ``name``, or ``None`` when absent.
        """
        return self.prototype.get(name)


class StructRegistry:
    """Read-only table of structs keyed by runtime type name."""

    def __init__(self, structs: Optional[Mapping[str, Struct]] = None):
        self._structs = MappingProxyType(dict(structs or {}))

    @classmethod
    def from_providers(cls, providers: Iterable[tuple[str, Struct]]) -> "StructRegistry":
        return cls(dict(providers))

    def __contains__(self, name: str) -> bool:
        return name in self._structs

    def contains(self, name: str) -> bool:
        return name in self._structs

    def get(self, name: str) -> Optional[Struct]:
        return self._structs.get(name)

    def names(self) -> list[str]:
        return list(self._structs)


class NativeRegistry:
    """Read-only table of host-provided functions."""

    def __init__(self, functions: Optional[Mapping[str, NativeFunction]] = None):
        self._functions = MappingProxyType(dict(functions or {}))

    @classmethod
    def from_modules(cls, modules: Iterable) -> "NativeRegistry":
        """
        Build a registry from modules exposing ``EXPORTS``.

        Later modules win when two export the same name.
        """
        functions = {}
        for module in modules:
            for name, function in module.EXPORTS:
                functions[name] = function
        return cls(functions)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def contains(self, name: str) -> bool:
        return name in self._functions

    def execute(self, name: str, args: list):
        """
        Call the native ``name`` with already evaluated arguments.
        """
        if name not in self._functions:
            return None
        return self._functions[name](args)

    def names(self) -> list[str]:
        return list(self._functions)
