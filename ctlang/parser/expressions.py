"""
Expression parsing utilities for ctlang.

These functions operate on a `ctlang.parser.parser.Parser` instance.
Operands are parsed by recursive descent; binary operators are folded by
precedence climbing over the table in `ctlang.operations`, every operator
being left-associative.
"""

from typing import TYPE_CHECKING, Optional

from ctlang.nodes import (
    BooleanLiteral,
    Binary,
    Break,
    Continue,
    FloatLiteral,
    FunctionCall,
    IntegerLiteral,
    Node,
    Return,
    StringLiteral,
    StructureCall,
    VariableReference,
)
from ctlang.operations import Keyword

if TYPE_CHECKING:
    from ctlang.parser import Parser


LITERALS = {
    "STRING": StringLiteral,
    "INTEGER": IntegerLiteral,
    "FLOAT": FloatLiteral,
}


# ---- Entry point ----

def parse_primary(parser: 'Parser') -> Optional[Node]:
    """Parse an operand and fold any binary operators that follow it."""
    left = parser.generic()
    if left is None:
        return None
    return parser.binary(0, left)


def parse_generic(parser: 'Parser') -> Optional[Node]:
    """Parse a literal, identifier form or parenthesized expression."""
    tok = parser.peek()
    if tok is None:
        return None

    if tok.type == "IDENTIFIER":
        return parser.identifier()

    if tok.type in LITERALS:
        parser.advance()
        return LITERALS[tok.type](tok.value, line=tok.line)

    if tok.type == "PUNCTUATION" and tok.value == "(":
        return parser.parenthesis()

    return parser.error(f"Unable to parse: {tok.value}")


def parse_binary(parser: 'Parser', expr_prec: int, left: Node) -> Node:
    """
    Fold operators whose precedence is at least ``expr_prec`` onto ``left``.

    A strictly tighter operator after the right operand is resolved first,
    at a floor one above the current operator.
    """
    while True:
        prec, operator = parser.precedence()
        if prec < expr_prec:
            return left

        op_tok = parser.advance()
        right = parser.generic()
        if right is None:
            parser.error(f"Expected an expression after '{operator}'")

        next_prec, _ = parser.precedence()
        if prec < next_prec:
            right = parser.binary(prec + 1, right)

        left = Binary(operator, left, right, line=op_tok.line)


def parse_identifier(parser: 'Parser') -> Node:
    """
    Parse everything that starts with an identifier.

    Keywords route to their statement forms; any other name becomes a
    variable reference, a ``name.attr`` member access or call, or a
    ``name(args)`` function call depending on the punctuation after it.
    """
    tok = parser.advance()
    name = tok.value

    match name:
        case Keyword.TRUE:
            return BooleanLiteral(True, line=tok.line)
        case Keyword.FALSE:
            return BooleanLiteral(False, line=tok.line)
        case Keyword.RETURN:
            if parser.equals(";"):
                return Return(None, line=tok.line)
            return Return(parser.primary(), line=tok.line)
        case Keyword.BREAK:
            return Break(line=tok.line)
        case Keyword.CONTINUE:
            return Continue(line=tok.line)
        case Keyword.LET:
            return parser.parse_let()
        case Keyword.IF:
            return parser.parse_if()
        case Keyword.WHILE:
            return parser.parse_while()
        case Keyword.FOR:
            return parser.parse_for()
        case Keyword.STRUCT:
            return parser.parse_struct()

    if parser.equals("."):
        parser.advance()
        attr = parser.advance()
        if attr is None or attr.type != "IDENTIFIER":
            received = attr.value if attr is not None else "end of input"
            parser.error(
                f"Expected structure attribute to be an identifier, but received: {received}"
            )
        args = parser.arguments() if parser.equals("(") else None
        return StructureCall(name, attr.value, args, line=tok.line)

    if parser.equals("("):
        return FunctionCall(name, parser.arguments(), line=tok.line)

    return VariableReference(name, line=tok.line)


def parse_parenthesis(parser: 'Parser') -> Node:
    """Parse ``( expression )``; the statement will need its semicolon."""
    parser.skip("(")
    node = parser.primary()
    if node is None:
        parser.error("Expected an expression after '('")
    parser.skip(")")
    parser.require_semicolon = True
    return node


def parse_arguments(parser: 'Parser') -> tuple[Node, ...]:
    """Parse ``(a, b, ...)`` into a tuple of expressions."""
    parser.skip("(")

    args = []
    while not parser.equals(")"):
        node = parser.primary()
        if node is None:
            parser.error("Invalid parameter in function arguments")
        args.append(node)
        if not parser.equals(")"):
            parser.skip(",")

    parser.skip(")")
    parser.require_semicolon = True
    return tuple(args)
