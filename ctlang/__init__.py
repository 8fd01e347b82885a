"""ctlang: a small dynamically typed scripting language.

The package is organised as a front end (source cursor, lexer, parser), the
runtime model (nodes, values, environments, registries) and the
tree-walking interpreter, plus the standard native modules and structs.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from ctlang.interpreter import Interpreter
from ctlang.parser import Parser

__version__ = "0.1.0"

__all__ = ["Interpreter", "Parser", "__version__"]
