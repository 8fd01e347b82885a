"""The ``String`` struct.

Its members are written in ctlang and parsed when the struct is built; the
receiver of ``s.member(...)`` arrives as the first parameter.
"""

from ctlang.nodes import FunctionDef
from ctlang.parser import Parser
from ctlang.registry import Struct

SOURCE = """
let len(s) {
    return len(s);
}
"""


def string_struct() -> Struct:
    """
    Build the struct serving string values.
    """
    prototype = {}
    for node in Parser(SOURCE, "<String>").parse():
        if isinstance(node, FunctionDef):
            prototype[node.name] = node
    return Struct(prototype)
