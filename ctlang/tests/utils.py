"""
Utility functions shared across ctlang tests.
"""
from ctlang.interpreter import Interpreter
from ctlang.parser import Parser


def parse_source(source: str):
    """
    Parse source code and return the list of statements.
    """
    return Parser(source, "<test>").parse()


def run_source(source: str, **kwargs):
    """
    Run source code and return the value of its last statement.
    """
    return Interpreter(source, "<test>", **kwargs).execute()


def run_with_interpreter(source: str, **kwargs) -> Interpreter:
    """
    Run source code and return the interpreter instance after execution.
    """
    interpreter = Interpreter(source, "<test>", **kwargs)
    interpreter.execute()
    return interpreter


def global_value(interpreter: Interpreter, name: str):
    """
    Return a binding from the interpreter's global scope.
    """
    return interpreter.environments.outermost.get(name)
