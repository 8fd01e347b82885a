"""
Tests for expression evaluation, scoping and control flow.
"""
import pytest

from ctlang.exceptions import (
    ArityException,
    CallDepthException,
    EvaluationException,
    ParserException,
    UndefinedVariableException,
    UnknownOpException,
)
from ctlang.interpreter import Interpreter
from ctlang.registry import Struct, StructRegistry
from ctlang.tests.utils import global_value, run_source, run_with_interpreter


def test_precedence():
    assert run_source("1 + 2 * 3;") == 7
    assert run_source("(1 + 2) * 3;") == 9


def test_declaration_and_reference():
    assert run_source("let x = 5; x;") == 5


def test_assignment_updates_existing_binding():
    assert run_source("let x = 5; x = x * 2; x;") == 10


def test_compound_assignment_is_not_an_operator():
    with pytest.raises(UnknownOpException, match="Unknown operator expression: 1 \\+= 1"):
        run_source("let x = 1; x += 1;")
    with pytest.raises(UnknownOpException):
        run_source("let x = 1; x -= 1;")


def test_block_scope():
    """
    Declarations inside a block vanish with it; assignments to outer
    variables persist.
    """
    interpreter = run_with_interpreter(
        "let x = 1;\n"
        "if (true) {\n"
        "    let y = 2;\n"
        "    x = 3;\n"
        "}\n"
    )
    assert global_value(interpreter, "x") == 3
    assert "y" not in interpreter.environments.outermost
    with pytest.raises(UndefinedVariableException):
        run_source("if (true) { let y = 2; } y;")


def test_while_body_scope():
    """
    Each loop iteration gets its own scope; outer variables assigned in the
    body keep their last value.
    """
    source = (
        "let count = 0;\n"
        "while (count < 3) {\n"
        "    let step = 1;\n"
        "    count = count + step;\n"
        "}\n"
    )
    interpreter = run_with_interpreter(source)
    assert global_value(interpreter, "count") == 3
    assert "step" not in interpreter.environments.outermost
    assert len(interpreter.environments) == 1
    with pytest.raises(UndefinedVariableException, match="Unknown variable 'step'"):
        run_source(source + "step;")


def test_while_break():
    source = (
        "let x = 0;\n"
        "while (x < 3) {\n"
        "    if (x == 1) { break; }\n"
        "    x = x + 1;\n"
        "}\n"
        "x;\n"
    )
    assert run_source(source) == 1


def test_while_continue():
    source = (
        "let i = 0;\n"
        "let total = 0;\n"
        "while (i < 5) {\n"
        "    i = i + 1;\n"
        "    if (i == 3) { continue; }\n"
        "    total = total + i;\n"
        "}\n"
        "total;\n"
    )
    assert run_source(source) == 12


def test_else_if_branch():
    source = (
        "let r = 0;\n"
        "if (false) { r = 1; } else if (true) { r = 2; } else { r = 3; }\n"
        "r;\n"
    )
    assert run_source(source) == 2
    assert run_source("let r = 0; if (false) { r = 1; } else { r = 3; } r;") == 3


def test_numeric_promotion_and_division():
    result = run_source("1 + 2.0;")
    assert result == 3.0 and isinstance(result, float)
    assert run_source("1 / 2;") == 0
    assert run_source("1.0 / 2;") == 0.5
    assert run_source("7 % 3;") == 1
    assert run_source("7.5 % 2;") == 1.5


def test_integer_division_truncates_toward_zero():
    assert run_source("let a = 0 - 7; a / 2;") == -3
    assert run_source("let a = 0 - 7; a % 2;") == -1


def test_division_by_zero():
    with pytest.raises(EvaluationException, match="Division by zero"):
        run_source("1 / 0;")
    with pytest.raises(EvaluationException, match="Modulo by zero"):
        run_source("1.0 % 0;")


def test_integer_overflow():
    with pytest.raises(EvaluationException, match="Integer overflow"):
        run_source("2147483647 + 1;")


def test_comparisons_and_logic():
    assert run_source("1 < 2;") is True
    assert run_source("2.5 >= 3;") is False
    assert run_source("1 != 2;") is True
    assert run_source("true && false;") is False
    assert run_source("true || false;") is True
    assert run_source("true == true;") is True


def test_strings():
    assert run_source('"a" + "b";') == "ab"
    assert run_source('"a" < "b";') is True
    assert run_source('"a" == "a";') is True


def test_unknown_operator_combinations():
    with pytest.raises(UnknownOpException, match="Unknown operator expression"):
        run_source('"a" + 1;')
    with pytest.raises(UnknownOpException):
        run_source("true + 1;")
    with pytest.raises(UnknownOpException):
        run_source("1 && 2;")


def test_unbound_identifier_is_fatal():
    with pytest.raises(UndefinedVariableException, match="Unknown variable 'y' on line 1 in <test>"):
        run_source("y;")
    with pytest.raises(UndefinedVariableException):
        run_source("z = 1;")
    with pytest.raises(UndefinedVariableException, match="Unknown function 'nope'"):
        run_source("nope();")


def test_declaration_without_value():
    with pytest.raises(EvaluationException, match="must be assigned a value"):
        run_source("let x;")


def test_non_boolean_condition():
    with pytest.raises(EvaluationException, match="Expected boolean expression inside if"):
        run_source("if (1) { 1; }")
    with pytest.raises(EvaluationException, match="inside while"):
        run_source('while ("yes") { }')


def test_function_call():
    assert run_source("let add(a, b) { return a + b; } add(2, 3);") == 5


def test_recursion():
    source = (
        "let fib(n) {\n"
        "    if (n < 2) { return n; }\n"
        "    return fib(n - 1) + fib(n - 2);\n"
        "}\n"
        "fib(10);\n"
    )
    assert run_source(source) == 55


def test_return_from_inside_loop():
    source = (
        "let f() {\n"
        "    let i = 0;\n"
        "    while (true) {\n"
        "        i = i + 1;\n"
        "        if (i == 4) { return i; }\n"
        "    }\n"
        "}\n"
        "f();\n"
    )
    assert run_source(source) == 4


def test_function_without_return_value():
    assert run_source("let f() { 1; } f();") is None
    assert run_source("let f() { return; } f();") is None


def test_break_outside_loop_is_ignored():
    assert run_source("let f() { break; return 1; } f();") == 1


def test_arity_mismatch():
    with pytest.raises(ArityException, match="expects 1 argument\\(s\\) but received 2"):
        run_source("let f(a) { return a; } f(1, 2);")


def test_function_redefinition():
    with pytest.raises(EvaluationException, match="Function already exists: f"):
        run_source("let f() { return 1; } let f() { return 2; }")
    source = (
        "let g() { return 1; }\n"
        "let h() {\n"
        "    let g() { return 2; }\n"
        "    return g();\n"
        "}\n"
        "h();\n"
    )
    with pytest.raises(EvaluationException, match="Function already exists: g"):
        run_source(source)


def test_callee_sees_caller_scope():
    source = (
        "let show() { return v; }\n"
        "let caller() {\n"
        "    let v = 7;\n"
        "    return show();\n"
        "}\n"
        "caller();\n"
    )
    assert run_source(source) == 7


def test_returned_function_is_declared_again():
    """
    A returned value is evaluated once more in the function's scope, so a
    function value whose name is still visible is rejected as a redefinition.
    """
    with pytest.raises(EvaluationException, match="Function already exists: g"):
        run_source("let g() { return 1; } let f() { return g; } f();")


def test_call_depth_limit():
    with pytest.raises(CallDepthException, match="Maximum call depth of 20 exceeded"):
        run_source("let loop(n) { return loop(n + 1); } loop(0);", max_depth=20)


def test_scopes_are_popped_after_errors():
    interpreter = Interpreter("let f() { let a = 1; return y; } f();", "<test>")
    with pytest.raises(UndefinedVariableException):
        interpreter.execute()
    assert len(interpreter.environments) == 1
    assert interpreter.depth == 0


def test_top_level_return_ends_the_run():
    interpreter = run_with_interpreter("let x = 1; return x + 1; x = 100;")
    assert global_value(interpreter, "x") == 1
    assert run_source("let x = 1; return x + 1; x = 100;") == 2


def test_statements_run_before_later_syntax_errors(capsys):
    with pytest.raises(ParserException):
        run_source('print("before"); 1 +')
    assert capsys.readouterr().out == "before"


def test_empty_struct_declaration():
    assert run_source("struct Point {}") is None


def test_string_member_call():
    assert run_source('let s = "abc"; s.len();') == 3
    assert run_source('let s = "héllo"; s.len();') == 5


def test_missing_member_yields_no_value():
    assert run_source('let s = "abc"; s.size;') is None
    assert run_source('let s = "abc"; s.size();') is None


def test_member_access_without_struct():
    with pytest.raises(EvaluationException, match="Unknown structure 'int'"):
        run_source("let n = 1; n.len();")


def test_custom_struct_members():
    structs = StructRegistry({"int": Struct({"x": 5})})
    assert run_source("let n = 1; n.x;", structs=structs) == 5
    with pytest.raises(EvaluationException, match="Unable to execute function: x"):
        run_source("let n = 1; n.x();", structs=structs)
