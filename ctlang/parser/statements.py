"""
Statement parsing utilities for ctlang.

These functions operate on a `ctlang.parser.parser.Parser` instance and
handle the statement forms introduced by a keyword: declarations and
function definitions (``let``), conditionals, loops and struct declarations.
Every form that ends with a ``}`` body waives the semicolon for the
statement it belongs to.
"""

from typing import TYPE_CHECKING

from ctlang.nodes import (
    BooleanLiteral,
    Branch,
    Declaration,
    FunctionDef,
    FunctionHeader,
    IfChain,
    Node,
    StructDecl,
    VariableReference,
    WhileLoop,
)
from ctlang.operations import Keyword

if TYPE_CHECKING:
    from ctlang.parser import Parser


def parse_body(parser: 'Parser') -> tuple[Node, ...]:
    """
    Parse a block of statements enclosed in braces.

    Args:
        parser: The parser instance.

    Returns:
        tuple: The statements of the block in source order.
    """
    parser.skip("{")
    parser.require_semicolon = True
    body = []
    while not parser.equals("}"):
        node = parser.next()
        if node is None:
            parser.error("Expected '}', but received end of input")
        body.append(node)
    parser.skip("}")
    parser.require_semicolon = False
    return tuple(body)


def parse_condition(parser: 'Parser') -> Node:
    """
    Parse ``( expression )`` in front of an if or while body.
    """
    parser.skip("(")
    condition = parser.primary()
    if condition is None:
        parser.error("Expected a condition")
    parser.skip(")")
    return condition


def parse_let(parser: 'Parser') -> Node:
    """
    Parse what follows ``let``.

    Syntax:
        let name
        let name(param, ...) { body }

    Parameters may be written ``name`` or ``let name``.

    Returns:
        Declaration | FunctionDef: The declared variable or the function.
    """
    tok = parser.advance()
    if tok is None:
        parser.error("Expected variable name, found end of input")
    if tok.type != "IDENTIFIER":
        parser.error(f"Expected variable name, found: {tok.value}")

    if not parser.equals("("):
        return Declaration(tok.value, line=tok.line)

    params = []
    for arg in parser.arguments():
        if not isinstance(arg, (Declaration, VariableReference)):
            parser.error(f"Expected a parameter name in the definition of '{tok.value}'")
        params.append(arg.name)

    header = FunctionHeader(tok.value, tuple(params), line=tok.line)
    return FunctionDef(header, parser.body(), line=tok.line)


def parse_if(parser: 'Parser') -> Node:
    """
    Parse a conditional chain. The ``if`` keyword is already consumed.

    Syntax:
        if (cond) { ... } else if (cond) { ... } else { ... }

    A trailing ``else`` branch is stored with the condition ``true``.

    Returns:
        IfChain: The branches in source order.
    """
    branches = []
    condition = parser.condition()

    while True:
        branches.append(Branch(condition, parser.body(), line=condition.line))

        if not parser.is_keyword(Keyword.ELSE):
            break
        else_tok = parser.advance()

        if parser.is_keyword(Keyword.IF):
            parser.advance()
            condition = parser.condition()
            continue

        nxt = parser.peek()
        if nxt is not None and nxt.type == "IDENTIFIER":
            parser.error("Expected 'if' identifier after 'else' identifier")
        branches.append(
            Branch(BooleanLiteral(True, line=else_tok.line), parser.body(), line=else_tok.line)
        )
        break

    parser.require_semicolon = False
    return IfChain(tuple(branches), line=branches[0].line)


def parse_while(parser: 'Parser') -> Node:
    """
    Parse a 'while' loop. The ``while`` keyword is already consumed.

    Returns:
        WhileLoop: The condition and body.
    """
    condition = parser.condition()
    return WhileLoop(condition, parser.body(), line=condition.line)


def parse_for(parser: 'Parser') -> Node:
    """
    Reject a 'for' loop; the language has none.

    Raises:
        ParserException: Always.
    """
    return parser.error("'for' loops are not supported")


def parse_struct(parser: 'Parser') -> Node:
    """
    Parse a struct declaration.

    Syntax:
        struct Name {}

    Members cannot be declared from source; only host structs have any.

    Raises:
        ParserException: If the name is missing or the body is not empty.
    """
    tok = parser.advance()
    if tok is None or tok.type != "IDENTIFIER":
        received = tok.value if tok is not None else "end of input"
        parser.error(f"Expected a name after 'struct' keyword, but received {received}")

    parser.skip("{")
    if not parser.equals("}"):
        parser.error(f"Struct '{tok.value}' must have an empty body")
    parser.skip("}")
    parser.require_semicolon = False
    return StructDecl(tok.value, line=tok.line)
