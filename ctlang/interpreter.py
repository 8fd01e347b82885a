"""Interpreter.

This is a tree-walk interpreter for evaluating the syntax tree produced by the
parser. It supports arithmetic, comparisons, variables, function definitions
and calls, conditionals, loops, native functions and struct member access.

1. Execution Model
The interpreter pulls one statement at a time from the parser and evaluates
it before the next one is parsed. `evaluate()` reduces a node against a
chain of scopes and returns an :class:`Outcome`: either a normal value or a
`break`, `continue` or `return` signal. Every caller that runs statements
inspects the outcome and either handles the signal or hands it upwards.

2. Environment
Variables live in an :class:`~ctlang.environment.EnvironmentChain`. Each if
branch, while iteration and function call runs inside a freshly pushed
scope that is popped however the block is left. Function bodies see the
caller's whole chain.

3. Calls
Names registered in the native registry are called with fully evaluated
arguments. Anything else must resolve to a user function in the scope
chain. Member calls (`s.len()`) look up the struct registered for the
receiver's runtime type and pass the receiver as the first argument.

4. Returns
A `return` evaluates its payload where it executes. When the signal reaches
the function body the value is evaluated a second time against the
function's scope, then the scope is popped. Plain values evaluate to
themselves; a returned function is a definition and is re-defined, which
fails when the name is still visible.

5. Error Handling
Evaluation errors such as unknown variables, unsupported operators or
argument count mismatches are raised as typed exceptions carrying the line
number and file. Natives report their own failures as
:class:`~ctlang.values.ErrorValue` results instead.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ctlang.environment import Environment, EnvironmentChain
from ctlang.exceptions import (
    ArityException,
    CallDepthException,
    EvaluationException,
    UndefinedVariableException,
    UnknownOpException,
)
from ctlang.modules import default_natives
from ctlang.nodes import (
    Binary,
    Break,
    Continue,
    Declaration,
    FunctionCall,
    FunctionDef,
    IfChain,
    Literal,
    Node,
    Return,
    StructDecl,
    StructureCall,
    VariableReference,
    WhileLoop,
)
from ctlang.operations import ARITHMETIC, COMPARISONS, Op
from ctlang.parser import Parser
from ctlang.registry import NativeRegistry, StructRegistry
from ctlang.structs import default_structs
from ctlang.values import (
    BOOL,
    FLOAT,
    INT,
    INT_MAX,
    INT_MIN,
    STRING,
    format_value,
    type_name,
)

DEFAULT_MAX_DEPTH = 64


class Flow(str, Enum):
    """
    How evaluation of a node finished.
    """

    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"
    RETURN = "return"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a node."""

    flow: Flow = Flow.NORMAL
    value: object = None


NO_VALUE = Outcome()
BREAK = Outcome(Flow.BREAK)
CONTINUE = Outcome(Flow.CONTINUE)


def normal(value) -> Outcome:
    return Outcome(Flow.NORMAL, value)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _compare(op: str, left, right) -> bool:
    match op:
        case Op.LT:
            return left < right
        case Op.GT:
            return left > right
        case Op.LE:
            return left <= right
        case Op.GE:
            return left >= right
        case Op.EQ:
            return left == right
        case _:
            return left != right


class Interpreter:
    """
    Tree-walk interpreter for ctlang.
    """
    def __init__(
        self,
        code: str,
        file: str = "<script>",
        natives: Optional[NativeRegistry] = None,
        structs: Optional[StructRegistry] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """
        Initialize the interpreter.

        Parameters:
            code (str): The program text.
            file (str): Name used in diagnostics.
            natives (NativeRegistry): Host functions; the standard modules when omitted.
            structs (StructRegistry): Host structs; the standard structs when omitted.
            max_depth (int): Deepest allowed nesting of user function calls.
        """
        self.parser = Parser(code, file)
        self.file = file
        self.natives = natives if natives is not None else default_natives()
        self.structs = structs if structs is not None else default_structs()
        self.environments = EnvironmentChain()
        self.max_depth = max_depth
        self.depth = 0

    def execute(self):
        """
        Parse and evaluate the program one statement at a time.

        Returns:
            The value of the last statement, or of a top-level ``return``.

        Raises:
            CtException: On the first fatal diagnostic.
        """
        result = None
        try:
            while (node := self.parser.next()) is not None:
                outcome = self.evaluate(node, self.environments)
                if outcome.flow is Flow.RETURN:
                    return outcome.value
                result = outcome.value
        except RecursionError as e:
            raise EvaluationException(
                "Program nests too deeply for the host interpreter", file=self.file
            ) from e
        return result

    def _format_expr(self, node) -> str:
        """
        Convert a node back to readable source text for diagnostics.
        """
        match node:
            case None:
                return "None"
            case Literal(value=value) if isinstance(value, str):
                return repr(value)
            case Literal(value=value):
                return format_value(value)
            case VariableReference(name=name):
                return name
            case Declaration(name=name):
                return f"let {name}"
            case Binary(operator=op, left=left, right=right):
                return f"({self._format_expr(left)} {op} {self._format_expr(right)})"
            case FunctionCall(name=name, args=args):
                return f"{name}({', '.join(self._format_expr(arg) for arg in args)})"
            case StructureCall(name=name, attribute=attr, args=None):
                return f"{name}.{attr}"
            case StructureCall(name=name, attribute=attr, args=args):
                return f"{name}.{attr}({', '.join(self._format_expr(arg) for arg in args)})"
            case Node():
                return f"<{type(node).__name__}>"
            case _:
                return format_value(node)

    def evaluate(self, node, environments: EnvironmentChain) -> Outcome:
        """
        Reduce ``node`` against ``environments``.

        Values that are not syntax nodes (already evaluated results) evaluate
        to themselves.

        Returns:
            Outcome: The value produced, or the control-flow signal raised.

        Raises:
            UndefinedVariableException: If a variable or function is not bound.
            UnknownOpException: If an operator does not apply to its operands.
            EvaluationException: For every other semantic error.
        """
        if not isinstance(node, Node):
            return normal(node)

        match node:
            case Literal(value=value):
                return normal(value)

            case Break():
                return BREAK
            case Continue():
                return CONTINUE
            case Return(value=payload):
                return Outcome(Flow.RETURN, self._expression(payload, environments))

            case VariableReference(name=name):
                scope = environments.lookup(name)
                if scope is None:
                    raise UndefinedVariableException(name, node.line, self.file)
                return normal(scope.get(name))

            case Binary():
                return normal(self._binary(node, environments))

            case Declaration(name=name):
                raise EvaluationException(
                    f"Declaration of '{name}' must be assigned a value", node.line, file=self.file
                )

            case FunctionDef(name=name):
                if environments.contains(name):
                    raise EvaluationException(
                        f"Function already exists: {name}", node.line, file=self.file
                    )
                return normal(environments.define(name, node))

            case FunctionCall():
                return normal(self._call(node, environments))

            case IfChain():
                return self._if(node, environments)

            case WhileLoop():
                return self._while(node, environments)

            case StructureCall():
                return normal(self._structure_call(node, environments))

            case StructDecl():
                return NO_VALUE

        raise EvaluationException(
            f"Unable to evaluate: {self._format_expr(node)}", node.line, file=self.file
        )

    def _expression(self, node, environments: EnvironmentChain):
        """
        Evaluate ``node`` where a value is required.
        """
        outcome = self.evaluate(node, environments)
        if outcome.flow is not Flow.NORMAL:
            raise EvaluationException(
                f"'{outcome.flow.value}' cannot be used as a value",
                getattr(node, "line", None),
                file=self.file,
            )
        return outcome.value

    def _run_block(self, body, environments: EnvironmentChain) -> Outcome:
        """
        Run statements in order, stopping at the first control-flow signal.
        """
        for statement in body:
            outcome = self.evaluate(statement, environments)
            if outcome.flow is not Flow.NORMAL:
                return outcome
        return NO_VALUE

    # Operators

    def _binary(self, node: Binary, environments: EnvironmentChain):
        if node.left is None or node.right is None:
            raise EvaluationException(
                f"Unable to parse binary expression: {self._format_expr(node)}",
                node.line,
                file=self.file,
            )

        if node.operator == Op.ASSIGN:
            return self._assign(node, environments)

        left = self._expression(node.left, environments)
        right = self._expression(node.right, environments)
        return self._apply_binary(node.operator, left, right, node.line)

    def _assign(self, node: Binary, environments: EnvironmentChain):
        match node.left:
            case Declaration(name=name):
                value = self._expression(node.right, environments)
                return environments.define(name, value)
            case VariableReference(name=name):
                value = self._expression(node.right, environments)
                scope = environments.lookup(name)
                if scope is None:
                    raise UndefinedVariableException(name, node.line, self.file)
                return scope.set(name, value)

        raise EvaluationException(
            f"Unable to assign right hand value to left hand variable: "
            f"{self._format_expr(node.left)} = {self._format_expr(node.right)}",
            node.line,
            file=self.file,
        )

    def _apply_binary(self, op: str, left, right, line=None):
        """
        Apply a non-assignment operator to two evaluated operands.

        Raises:
            EvaluationException: If an operand produced no value, on division
                by zero or on integer overflow.
            UnknownOpException: If the operator does not apply to the operands.
        """
        if left is None or right is None:
            raise EvaluationException(
                f"Unable to parse binary expression: "
                f"{format_value(left)} {op} {format_value(right)}",
                line,
                file=self.file,
            )

        left_type, right_type = type_name(left), type_name(right)

        if left_type == INT and right_type == INT:
            result = self._apply_int(op, left, right, line)
            if result is not None:
                return result
        elif {left_type, right_type} <= {INT, FLOAT}:
            result = self._apply_float(op, float(left), float(right), line)
            if result is not None:
                return result
        elif left_type == BOOL and right_type == BOOL:
            match op:
                case Op.EQ:
                    return left == right
                case Op.NE:
                    return left != right
                case Op.AND:
                    return left and right
                case Op.OR:
                    return left or right
        elif left_type == STRING and right_type == STRING:
            if op in COMPARISONS:
                return _compare(op, left, right)
            if op == Op.ADD:
                return left + right

        raise UnknownOpException(
            op, line, self.file, left=format_value(left), right=format_value(right)
        )

    def _apply_int(self, op: str, left: int, right: int, line):
        if op in COMPARISONS:
            return _compare(op, left, right)
        if op not in ARITHMETIC:
            return None

        match op:
            case Op.ADD:
                term = left + right
            case Op.SUB:
                term = left - right
            case Op.MUL:
                term = left * right
            case Op.DIV:
                self._check_divisor(op, right, line)
                term = _trunc_div(left, right)
            case _:
                self._check_divisor(op, right, line)
                term = left - right * _trunc_div(left, right)

        if not INT_MIN <= term <= INT_MAX:
            raise EvaluationException(
                f"Integer overflow: {left} {op} {right}", line, file=self.file
            )
        return term

    def _apply_float(self, op: str, left: float, right: float, line):
        if op in COMPARISONS:
            return _compare(op, left, right)

        match op:
            case Op.ADD:
                return left + right
            case Op.SUB:
                return left - right
            case Op.MUL:
                return left * right
            case Op.DIV:
                self._check_divisor(op, right, line)
                return left / right
            case Op.MOD:
                self._check_divisor(op, right, line)
                return math.fmod(left, right)
        return None

    def _check_divisor(self, op: str, divisor, line) -> None:
        if divisor == 0:
            kind = "Division" if op == Op.DIV else "Modulo"
            raise EvaluationException(f"{kind} by zero", line, file=self.file)

    # Calls

    def _call(self, node: FunctionCall, environments: EnvironmentChain):
        if node.name in self.natives:
            args = [self._expression(arg, environments) for arg in node.args]
            return self.natives.execute(node.name, args)

        scope = environments.lookup(node.name)
        if scope is None:
            raise UndefinedVariableException(node.name, node.line, self.file, kind="function")
        return self._call_function(
            node.name, scope.get(node.name), node.args, environments, node.line
        )

    def _call_function(self, name: str, function, args, environments: EnvironmentChain, line):
        """
        Invoke a user function.

        Arguments are evaluated in the caller's chain, then bound by position
        in a new scope pushed on top of it.
        """
        if not isinstance(function, FunctionDef):
            raise EvaluationException(f"Unable to execute function: {name}", line, file=self.file)
        if len(args) != len(function.params):
            raise ArityException(name, len(function.params), len(args), line, self.file)
        if self.depth >= self.max_depth:
            raise CallDepthException(self.max_depth, line, self.file)

        values = [self._expression(arg, environments) for arg in args]
        scope = Environment(dict(zip(function.params, values)))

        self.depth += 1
        try:
            with environments.scope(scope):
                for statement in function.body:
                    outcome = self.evaluate(statement, environments)
                    # break/continue outside of a loop end nothing
                    if outcome.flow is Flow.RETURN:
                        return self._expression(outcome.value, environments)
                return None
        finally:
            self.depth -= 1

    def _structure_call(self, node: StructureCall, environments: EnvironmentChain):
        scope = environments.lookup(node.name)
        if scope is None:
            raise UndefinedVariableException(node.name, node.line, self.file)
        receiver = scope.get(node.name)

        struct_name = type_name(receiver)
        structure = self.structs.get(struct_name)
        if structure is None:
            raise EvaluationException(
                f"Unknown structure '{struct_name}' for {self._format_expr(node)}",
                node.line,
                file=self.file,
            )

        member = structure.get(node.attribute)
        if member is None or node.args is None:
            return member
        return self._call_function(
            node.attribute, member, (receiver, *node.args), environments, node.line
        )

    # Control flow

    def _if(self, node: IfChain, environments: EnvironmentChain) -> Outcome:
        for branch in node.branches:
            condition = self._condition(branch.condition, environments, "if")
            if condition:
                with environments.scope():
                    return self._run_block(branch.body, environments)
        return NO_VALUE

    def _while(self, node: WhileLoop, environments: EnvironmentChain) -> Outcome:
        while self._condition(node.condition, environments, "while"):
            with environments.scope():
                outcome = self._run_block(node.body, environments)
            if outcome.flow is Flow.BREAK:
                break
            if outcome.flow is Flow.RETURN:
                return outcome
        return NO_VALUE

    def _condition(self, node: Node, environments: EnvironmentChain, statement: str) -> bool:
        value = self._expression(node, environments)
        if not isinstance(value, bool):
            raise EvaluationException(
                f"Expected boolean expression inside {statement} statement, "
                f"but received: {format_value(value)}",
                node.line,
                file=self.file,
            )
        return value
