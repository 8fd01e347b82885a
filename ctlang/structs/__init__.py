"""Host structs.

A struct supplies the members reachable through ``value.member`` for values
of one runtime type. Structs are registered under the type name they serve.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from ctlang.registry import StructRegistry
from ctlang.values import STRING

from .string import string_struct


def default_structs() -> StructRegistry:
    """
    Build the registry holding the standard structs.
    """
    return StructRegistry.from_providers([(STRING, string_struct())])


__all__ = ["default_structs", "string_struct"]
