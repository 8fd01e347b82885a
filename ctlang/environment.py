"""Environments.

An :class:`Environment` is one scope: a mapping of names to runtime values.
The :class:`EnvironmentChain` is the ordered stack of scopes the evaluator
works against, innermost last. Lookups scan from the innermost scope
outwards; definitions always go into the innermost scope.

Blocks (if branches, while iterations and function bodies) enter a fresh
scope through :meth:`EnvironmentChain.scope`, which pops it again however the
block is left.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from contextlib import contextmanager
from typing import Iterator, Optional


class Environment:
    """A single scope."""

    def __init__(self, values: Optional[dict] = None):
        self.vars = dict(values) if values else {}

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def get(self, name: str):
        """
        Return the value bound to ``name`` in this scope.
        """
        return self.vars[name]

    def set(self, name: str, value):
        """
        Overwrite an existing binding.

        Returns:
            The stored value, or ``None`` if ``name`` is not bound here.
        """
        if name in self.vars:
            return self.define(name, value)
        return None

    def define(self, name: str, value):
        """
        Bind ``name`` in this scope and return the stored value.
        """
        self.vars[name] = value
        return value

    def __repr__(self) -> str:
        return f"Environment({self.vars!r})"


class EnvironmentChain:
    """
    Ordered stack of scopes. The chain always holds at least the global
    scope.
    """

    def __init__(self, global_scope: Optional[Environment] = None):
        self.environments: list[Environment] = [global_scope or Environment()]

    def __len__(self) -> int:
        return len(self.environments)

    def __iter__(self) -> Iterator[Environment]:
        return iter(self.environments)

    @property
    def innermost(self) -> Environment:
        return self.environments[-1]

    @property
    def outermost(self) -> Environment:
        return self.environments[0]

    def push(self, scope: Optional[Environment] = None) -> Environment:
        scope = scope if scope is not None else Environment()
        self.environments.append(scope)
        return scope

    def pop(self) -> Environment:
        if len(self.environments) == 1:
            raise IndexError("Cannot pop the global scope")
        return self.environments.pop()

    @contextmanager
    def scope(self, scope: Optional[Environment] = None) -> Iterator[Environment]:
        """
        Push a scope for the duration of a ``with`` block.
        """
        pushed = self.push(scope)
        try:
            yield pushed
        finally:
            self.pop()

    def lookup(self, name: str) -> Optional[Environment]:
        """
        Return the innermost scope binding ``name``, or ``None``.
        """
        for env in reversed(self.environments):
            if name in env:
                return env
        return None

    def contains(self, name: str) -> bool:
        return self.lookup(name) is not None

    def define(self, name: str, value):
        """
        Bind ``name`` in the innermost scope, shadowing outer bindings.
        """
        return self.innermost.define(name, value)
