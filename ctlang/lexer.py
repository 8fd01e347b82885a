"""Lexer for ctlang.

The lexer reads characters from a :class:`~ctlang.source.SourceReader` and
produces one token at a time with a single token of lookahead: :meth:`Lexer.peek`
computes and caches the next token, :meth:`Lexer.next` hands out the cached
token (or computes a fresh one) and clears the cache.

Tokens are identifiers, single punctuation characters, operator runs, string
literals and integer/float literals. Keywords are plain identifiers here; the
parser gives them meaning. Comments are not handled at this level: ``//`` is
an ordinary operator token and the parser asks the lexer to drop the rest of
the line with :meth:`Lexer.skip_line`.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from decimal import Decimal

from ctlang.source import SourceReader
from ctlang.values import INT_MAX, INT_MIN

WHITESPACE = " \t\r\n"
PUNCTUATION = "(){}[];,."
OPERATOR_CHARS = "&|%*/+-=<>!"

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "v": "\x0b",
}


class Token:
    """
    Represents a lexical token with a type and value.
    """
    def __init__(self, type_, value, line, col=0):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): Line the token starts on.
            col (int): Column the token starts at.
        """
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def to_source(self) -> str:
        """
        Return source text that tokenizes back to this token.
        """
        if self.type == "STRING":
            reverse = {v: k for k, v in ESCAPES.items()}
            out = []
            for c in self.value:
                if c in ('"', "\\"):
                    out.append("\\" + c)
                elif c in reverse:
                    out.append("\\" + reverse[c])
                else:
                    out.append(c)
            return '"' + "".join(out) + '"'
        if self.type == "FLOAT":
            text = repr(self.value)
            if "e" in text:
                text = format(Decimal(text), "f")
            return text if "." in text else text + ".0"
        return str(self.value)

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line})"


class Lexer:
    """
    Single-lookahead tokenizer over a source string.
    """
    def __init__(self, code: str, file: str = "<script>"):
        self.input = SourceReader(code, file)
        self.current = None
        self.peeked = False

    @property
    def position(self) -> tuple[int, int]:
        """
        Return the ``(line, col)`` of the underlying reader.
        """
        return self.input.position

    def next(self):
        """
        Return the next token, or ``None`` at the end of input.

        Raises:
            LexerException: If a character or literal cannot be read.
        """
        if self.peeked:
            self.peeked = False
            return self.current

        self._read_while(lambda c: c in WHITESPACE)
        if self.input.eof():
            return None

        line, col = self.input.position
        c = self.input.peek()

        if c == '"':
            return Token("STRING", self._read_string(), line, col)
        if _id_start(c):
            return Token("IDENTIFIER", self._read_while(_id), line, col)
        if c in PUNCTUATION:
            return Token("PUNCTUATION", self.input.next(), line, col)
        if c in OPERATOR_CHARS:
            return Token("OPERATOR", self._read_while(lambda ch: ch in OPERATOR_CHARS), line, col)
        if _digit(c):
            return self._read_number(line, col)

        return self.error(f"Cannot identify: {c}")

    def peek(self):
        """
        Return the next token without consuming it.
        """
        if not self.peeked:
            self.current = self.next()
            self.peeked = True
        return self.current

    def skip_line(self) -> None:
        """
        Discard characters up to the end of the current line.

        Any cached lookahead token is dropped as well.
        """
        self._read_while(lambda c: c != "\n")
        self.current = None
        self.peeked = False

    def error(self, message: str):
        """
        Raise a lexical diagnostic at the current position.
        """
        self.input.error(message)

    def _read_while(self, predicate) -> str:
        result = []
        while not self.input.eof() and predicate(self.input.peek()):
            result.append(self.input.next())
        return "".join(result)

    def _read_string(self) -> str:
        escaped = False
        chars = []
        self.input.next()  # opening quote

        while not self.input.eof():
            c = self.input.next()
            if escaped:
                chars.append(ESCAPES.get(c, c))
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == '"':
                break
            else:
                chars.append(c)

        return "".join(chars)

    def _read_number(self, line: int, col: int) -> Token:
        text = self._read_while(_digit)
        if not self.input.eof() and self.input.peek() == ".":
            text += self.input.next()
            text += self._read_while(_digit)
            try:
                return Token("FLOAT", float(text), line, col)
            except ValueError:
                return self.error("Expected a float")

        value = int(text)
        if not INT_MIN <= value <= INT_MAX:
            return self.error("Expected an integer")
        return Token("INTEGER", value, line, col)


def _id_start(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"


def _digit(c: str) -> bool:
    return "0" <= c <= "9"


def _id(c: str) -> bool:
    return _id_start(c) or _digit(c) or c == "-"


def tokenize(code: str, file: str = "<script>") -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Name used in diagnostics.

    Returns:
        list[Token]: Every token in the source, in order.

    Raises:
        LexerException: If an unexpected character is encountered.
    """
    lexer = Lexer(code, file)
    tokens = []
    while (token := lexer.next()) is not None:
        tokens.append(token)
    return tokens
