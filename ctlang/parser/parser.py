"""Main parser entry point for ctlang.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`ctlang.parser.expressions` and `ctlang.parser.statements`.

Parsing is incremental: each call to :meth:`Parser.next` reads exactly one
statement from the lexer, so the interpreter can evaluate a program while
it is still being parsed. A statement ends with a mandatory ``;`` unless
the form just parsed ended with a ``}`` body, which waives the semicolon for
that one statement.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import Optional

from ctlang.exceptions import ParserException
from ctlang.lexer import Lexer, Token
from ctlang.nodes import Node
from ctlang.operations import COMMENT, precedence

from . import expressions as _expr
from . import statements as _stmt


class Parser:
    """ctlang parser."""

    def __init__(self, code: str, file: str = "<script>"):
        """
        Initialize the parser over a source string.

        Parameters:
            code (str): The program text.
            file (str): The name of the script, used in diagnostics.
        """
        self.lexer = Lexer(code, file)
        self.source_file = file
        self.require_semicolon = True

    # Token helpers
    def peek(self) -> Optional[Token]:
        """
        Return the next significant token, discarding ``//`` comments.
        """
        token = self.lexer.peek()
        while (
            token is not None
            and token.type == "OPERATOR"
            and token.value.startswith(COMMENT)
        ):
            self.lexer.skip_line()
            token = self.lexer.peek()
        return token

    def advance(self) -> Optional[Token]:
        """
        Consume and return the next significant token.
        """
        self.peek()
        return self.lexer.next()

    def equals(self, char: str) -> bool:
        """
        Return ``True`` if the next token is the punctuation ``char``.
        """
        token = self.peek()
        return token is not None and token.type == "PUNCTUATION" and token.value == char

    def is_keyword(self, keyword: str) -> bool:
        """
        Return ``True`` if the next token is the identifier ``keyword``.
        """
        token = self.peek()
        return token is not None and token.type == "IDENTIFIER" and token.value == keyword

    def skip(self, char: str) -> None:
        """
        Consume the punctuation ``char``.

        Raises:
            ParserException: If the next token is anything else.
        """
        if self.equals(char):
            self.advance()
            return
        token = self.peek()
        received = token.value if token is not None else "end of input"
        self.error(f"Expected '{char}', but received {received}")

    def precedence(self) -> tuple[int, Optional[str]]:
        """
        Return the binding power and spelling of the next token when it is a
        binary operator, or ``(-1, None)``.
        """
        token = self.peek()
        if token is None or token.type != "OPERATOR":
            return -1, None
        return precedence(token.value), token.value

    def error(self, message: str):
        """
        Raise a syntax diagnostic at the lookahead token.

        Raises:
            ParserException: Always.
        """
        token = self.lexer.current if self.lexer.peeked else None
        if token is not None:
            line, col = token.line, token.col
        else:
            line, col = self.lexer.position
        raise ParserException(message, line, col, self.source_file)

    # Expression wrappers
    def primary(self) -> Optional[Node]:
        """
        Parse a full expression: an operand followed by any binary operators.
        """
        return _expr.parse_primary(self)

    def generic(self) -> Optional[Node]:
        """
        Parse a single operand such as a literal, call or parenthesized group.
        """
        return _expr.parse_generic(self)

    def binary(self, expr_prec: int, left: Node) -> Node:
        """
        Fold binary operators binding at least as tightly as ``expr_prec``.
        """
        return _expr.parse_binary(self, expr_prec, left)

    def identifier(self) -> Node:
        """
        Parse a keyword form, variable reference, member access or call.
        """
        return _expr.parse_identifier(self)

    def parenthesis(self) -> Node:
        """
        Parse a parenthesized expression.
        """
        return _expr.parse_parenthesis(self)

    def arguments(self) -> tuple[Node, ...]:
        """
        Parse a parenthesized, comma separated argument list.
        """
        return _expr.parse_arguments(self)

    # Statement wrappers
    def body(self) -> tuple[Node, ...]:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_body(self)

    def condition(self) -> Node:
        """
        Parse a parenthesized condition.
        """
        return _stmt.parse_condition(self)

    def parse_let(self) -> Node:
        """
        Parse a variable declaration or function definition.
        """
        return _stmt.parse_let(self)

    def parse_if(self) -> Node:
        """
        Parse an 'if' chain with optional 'else if' and 'else' branches.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> Node:
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_for(self) -> Node:
        """
        Parse a 'for' loop.
        """
        return _stmt.parse_for(self)

    def parse_struct(self) -> Node:
        """
        Parse a 'struct' declaration.
        """
        return _stmt.parse_struct(self)

    def next(self) -> Optional[Node]:
        """
        Parse the next statement, or return ``None`` at the end of input.
        """
        node = self.primary()
        if node is None:
            return None

        if self.require_semicolon:
            self.skip(";")
        else:
            self.require_semicolon = True

        return node

    def parse(self) -> list[Node]:
        """
        Parse the full input into a list of statements.
        """
        statements = []
        while (node := self.next()) is not None:
            statements.append(node)
        return statements
