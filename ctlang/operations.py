"""Shared definitions for operators and keywords.

This module centralizes the operator spellings and keywords used by the
parser and interpreter, together with the binding power of every binary
operator. Keeping them in one place prevents the two components from
drifting apart when an operator is added or renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported binary operators.
    """

    # Assignment
    ASSIGN = "="
    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="

    # Boolean
    OR = "||"
    AND = "&&"

    # Comparison
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    EQ = "=="
    NE = "!="

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the operator spelling for nicer diagnostics.
        """
        return self.value


class Keyword(str, Enum):
    """
    Identifiers with a meaning of their own.
    """

    LET = "let"
    IF = "if"
    ELSE = "else"
    FOR = "for"
    WHILE = "while"
    RETURN = "return"
    BREAK = "break"
    CONTINUE = "continue"
    TRUE = "true"
    FALSE = "false"
    STRUCT = "struct"


# Higher binds tighter; every operator is left-associative. Keyed by
# operator spelling.
PRECEDENCE: dict[str, int] = {
    Op.ASSIGN.value: 1,
    Op.ADD_ASSIGN.value: 1,
    Op.SUB_ASSIGN.value: 1,
    Op.OR.value: 5,
    Op.AND.value: 6,
    Op.LT.value: 10,
    Op.GT.value: 10,
    Op.LE.value: 10,
    Op.GE.value: 10,
    Op.EQ.value: 10,
    Op.NE.value: 10,
    Op.ADD.value: 20,
    Op.SUB.value: 20,
    Op.MUL.value: 30,
    Op.DIV.value: 30,
    Op.MOD.value: 30,
}

COMPARISONS = (Op.LT, Op.GT, Op.LE, Op.GE, Op.EQ, Op.NE)
ARITHMETIC = (Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.MOD)

COMMENT = "//"


def precedence(operator: str) -> int:
    """
    Return the binding power of ``operator``, or ``-1`` if it is not a
    binary operator.
    """
    return PRECEDENCE.get(operator, -1)


__all__ = ["Op", "Keyword", "PRECEDENCE", "COMPARISONS", "ARITHMETIC", "COMMENT", "precedence"]
