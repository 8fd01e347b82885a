"""Native function modules.

Each module exposes an ordered ``EXPORTS`` list of ``(name, callable)``
pairs. A native receives its evaluated arguments as a list and returns one
value or ``None``. Natives never raise for bad input; they return an
:class:`~ctlang.values.ErrorValue` instead.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from ctlang.registry import NativeRegistry

from . import filestream, iostream, string

MODULES = (iostream, filestream, string)


def default_natives() -> NativeRegistry:
    """
    Build the registry holding every standard native function.
    """
    return NativeRegistry.from_modules(MODULES)


__all__ = ["MODULES", "default_natives"]
