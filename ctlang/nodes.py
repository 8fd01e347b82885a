"""Syntax tree nodes for ctlang.

The parser produces one statement-level node per call; every node is an
immutable dataclass whose children are owned exclusively by their parent.
Each node records the source line it started on. Lines are excluded from
equality so that trees parsed from differently laid out sources compare
equal.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

ANY = "any"


@dataclass(frozen=True)
class Node:
    """Base class for all syntax tree nodes."""
    line: int = field(default=0, compare=False, repr=False, kw_only=True)


# Literals

@dataclass(frozen=True)
class Literal(Node):
    """Base class for literal values."""
    value: object


@dataclass(frozen=True)
class StringLiteral(Literal):
    value: str


@dataclass(frozen=True)
class BooleanLiteral(Literal):
    value: bool


@dataclass(frozen=True)
class IntegerLiteral(Literal):
    value: int


@dataclass(frozen=True)
class FloatLiteral(Literal):
    value: float


# Expressions

@dataclass(frozen=True)
class Binary(Node):
    """
    A binary operation. Either operand may be absent when the parser ran out
    of input; the evaluator rejects such nodes.
    """
    operator: str
    left: Optional[Node]
    right: Optional[Node]


@dataclass(frozen=True)
class VariableReference(Node):
    name: str


@dataclass(frozen=True)
class Declaration(Node):
    """``let name``; only meaningful as the target of ``=``."""
    name: str
    type_tag: str = ANY


@dataclass(frozen=True)
class FunctionCall(Node):
    name: str
    args: tuple[Node, ...] = ()


@dataclass(frozen=True)
class StructureCall(Node):
    """
    ``name.attribute`` when ``args`` is ``None``, otherwise
    ``name.attribute(args...)``.
    """
    name: str
    attribute: str
    args: Optional[tuple[Node, ...]] = None


# Functions

@dataclass(frozen=True)
class FunctionHeader(Node):
    name: str
    params: tuple[str, ...] = ()
    return_type: str = ANY


@dataclass(frozen=True)
class FunctionDef(Node):
    header: FunctionHeader
    body: tuple[Node, ...] = ()

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def params(self) -> tuple[str, ...]:
        return self.header.params

    def __str__(self) -> str:
        return f"<fun {self.name}>"


# Control flow

@dataclass(frozen=True)
class Branch(Node):
    condition: Node
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class IfChain(Node):
    branches: tuple[Branch, ...]


@dataclass(frozen=True)
class WhileLoop(Node):
    condition: Node
    body: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Return(Node):
    value: Optional[Node]


@dataclass(frozen=True)
class Break(Node):
    pass


@dataclass(frozen=True)
class Continue(Node):
    pass


@dataclass(frozen=True)
class StructDecl(Node):
    """``struct Name {}``. Source-declared structs are always empty."""
    name: str
