"""Errors.

Every language-core failure is a fatal diagnostic: an exception derived from
:class:`CtException` carrying the message and the source position it was
raised at. Only the command-line driver decides what to do with one; the
core itself never prints or exits.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class CtException(Exception):
    """
    Base class for fatal diagnostics.
    """
    def __init__(self, message, line=None, col=None, file=None):
        self.message = message
        self.line = line
        self.col = col
        self.file = file
        if line is not None and col is not None:
            message += f" (line: {line}, col: {col})"
        elif line is not None:
            message += f" on line {line}"
        if file is not None:
            message += f" in {file}"
        super().__init__(message)


class LexerException(CtException):
    """
    Error for characters or literals the tokenizer cannot read.
    """


class ParserException(CtException):
    """
    Error for malformed statements and expressions.
    """


class EvaluationException(CtException):
    """
    Error raised while evaluating a well-formed syntax tree.
    """


class UndefinedVariableException(EvaluationException):
    """
    Error for undefined variables and functions.
    """
    def __init__(self, varname, line=None, file=None, kind="variable"):
        self.varname = varname
        super().__init__(f"Unknown {kind} '{varname}'", line, file=file)


class UnknownOpException(EvaluationException):
    """
    Error for operator/operand combinations with no defined meaning.
    """
    def __init__(self, op, line=None, file=None, left="", right=""):
        self.op = op
        super().__init__(
            f"Unknown operator expression: {left} {op} {right}".strip(), line, file=file
        )


class ArityException(EvaluationException):
    """
    Error for calls whose argument count does not match the parameter list.
    """
    def __init__(self, name, expected, received, line=None, file=None):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Function '{name}' expects {expected} argument(s) but received {received}",
            line,
            file=file,
        )


class CallDepthException(EvaluationException):
    """
    Error for user recursion deeper than the interpreter allows.
    """
    def __init__(self, limit, line=None, file=None):
        self.limit = limit
        super().__init__(f"Maximum call depth of {limit} exceeded", line, file=file)
