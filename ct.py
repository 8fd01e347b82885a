"""
ctlang Interpreter

This is the main entry point for the ctlang interpreter.

Workflow:
1. The source script is read from the file named on the command line.
2. The Parser pulls tokens from the Lexer one statement at a time.
3. The Interpreter evaluates each statement as soon as it is parsed.

Environment:
    CTDEBUG     Print the token list and syntax tree before running.
    CTMAXDEPTH  Override the maximum depth of nested function calls.
"""
import os
import sys

from ctlang.exceptions import CtException
from ctlang.interpreter import DEFAULT_MAX_DEPTH, Interpreter
from ctlang.lexer import tokenize
from ctlang.modules.filestream import read_file
from ctlang.parser import Parser
from ctlang.values import ErrorValue


def print_usage():
    """
    Print usage.
    """
    print()
    print("ctlang Interpreter")
    print()
    print("Usage:")
    print("    ct <script.ct>")
    print()
    print("Arguments:")
    print("    <script.ct>")
    print("        Path to a ctlang source file to execute.")
    print()
    print("Example:")
    print("    ct hello.ct")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def max_depth() -> int:
    """
    Return the call depth ceiling, honouring ``CTMAXDEPTH`` when it is set.
    """
    value = os.environ.get("CTMAXDEPTH")
    if not value:
        return DEFAULT_MAX_DEPTH
    try:
        return int(value)
    except ValueError:
        print(f"Ignoring invalid CTMAXDEPTH: {value}")
        return DEFAULT_MAX_DEPTH


def run_script(script_name: str) -> int:
    """
    Run a ctlang script
    """
    code = read_file([script_name])
    if isinstance(code, ErrorValue):
        print(code.message)
        return 1

    try:
        if os.environ.get("CTDEBUG"):
            debug_print_tokens_ast(tokenize(code, script_name), Parser(code, script_name).parse())

        interpreter = Interpreter(code, script_name, max_depth=max_depth())
        interpreter.execute()
    except CtException as e:
        sys.stdout.flush()
        print(f"{type(e).__name__}: {e}")
        return 1
    return 0


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: print the placeholder for the interactive mode and usage.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    args = argv[1:]
    if not args:
        print("Command line interpreter is not yet implemented.")
        print_usage()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return 1


def cli() -> None:
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
