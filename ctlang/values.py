"""Runtime values.

Evaluated programs work with plain Python values: ``int``, ``float``,
``bool`` and ``str`` for the literal types, a
:class:`~ctlang.nodes.FunctionDef` for functions, :class:`ErrorValue` for
soft errors reported by native functions and ``None`` for "no value".

This module also holds the runtime type names used to pick the struct
behind a member access, and the display form natives print values with.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass

from ctlang.nodes import FunctionDef

# Integers are 32-bit signed
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

STRING = "String"
BOOL = "bool"
INT = "int"
FLOAT = "float"
FUNCTION = "fun"
ERROR = "err"
NULL = "null"


@dataclass(frozen=True)
class ErrorValue:
    """
    A recoverable error returned as ordinary program data.
    """
    message: str

    def __str__(self) -> str:
        return f'Error("{self.message}")'


def type_name(value) -> str:
    """
    Return the runtime type name of ``value``.
    """
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, int):
        return INT
    if isinstance(value, float):
        return FLOAT
    if isinstance(value, str):
        return STRING
    if isinstance(value, FunctionDef):
        return FUNCTION
    if isinstance(value, ErrorValue):
        return ERROR
    return NULL


def format_value(value) -> str:
    """
    Return the display form of a runtime value.
    """
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
