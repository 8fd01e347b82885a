"""Source cursor.

Character-indexed reader over the program text. It tracks the line and
column of the next character so that the tokenizer (and everything built on
it) can attach a position to its diagnostics.


File: source.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from ctlang.exceptions import LexerException


class SourceReader:
    """
    Reads a source string one character at a time.
    """
    def __init__(self, code: str, file: str = "<script>"):
        """
        Initialize the reader at the first character.

        Parameters:
            code (str): The program text.
            file (str): Name used in diagnostics.
        """
        self.code = code
        self.file = file
        self.index = 0
        self.line = 1
        self.col = 0

    @property
    def position(self) -> tuple[int, int]:
        """
        Return the current ``(line, col)`` pair.
        """
        return self.line, self.col

    def next(self) -> str:
        """
        Consume and return the current character.
        """
        c = self.code[self.index]
        if c == "\n":
            self.line += 1
            self.col = 0
        else:
            self.col += 1
        self.index += 1
        return c

    def peek(self) -> str:
        """
        Return the current character without consuming it.
        """
        return self.code[self.index]

    def eof(self) -> bool:
        """
        Return ``True`` once every character has been consumed.
        """
        return self.index >= len(self.code)

    def error(self, message: str):
        """
        Abort tokenization at the current position.

        Raises:
            LexerException: Always.
        """
        raise LexerException(message, self.line, self.col, self.file)
