"""
Tests for procedure definitions and calls in HolyC
"""
import pytest

from holyc.exceptions import ParseError
from holyc.nodes import CallStmt, ProcDef

from holyc.tests.utils import parse_source, run_source


def test_proc_def_ast():
    ast = parse_source("I32 Add(I32 a, I32 b = 10) { return a + b; }\nAdd(1);")
    proc, call = ast
    assert isinstance(proc, ProcDef)
    prototype = proc.prototype
    assert prototype.name == 'Add'
    assert prototype.return_type == 'I32'
    assert [param.symbol.name for param in prototype.params] == ['a', 'b']
    assert prototype.params[1].has_default
    assert prototype.params[1].default == 10
    assert isinstance(call, CallStmt)
    assert call.call.prototype is prototype


def test_default_arguments():
    source = 'I32 Add(I32 a, I32 b = 10) { return a + b; }\n"%d %d", Add(1), Add(1, 2);'
    assert run_source(source) == "11 3"


def test_skipped_position_uses_default():
    source = 'I32 F(I32 a = 1, I32 b = 2) { return a * 10 + b; }\n"%d", F(, 5);'
    assert run_source(source) == "15"


def test_bare_call():
    source = 'U0 Hello() { "hi"; }\nHello;\nHello();'
    assert run_source(source) == "hihi"


def test_bare_call_with_all_defaults():
    source = 'U0 Greet(U0 who = "world") { "hello %s", who; }\nGreet;'
    assert run_source(source) == "hello world"


def test_too_many_arguments():
    with pytest.raises(ParseError) as exc_info:
        parse_source("U0 F(I32 a) { }\nF(1, 2);")
    assert exc_info.value.line == 2


def test_missing_argument_without_default():
    with pytest.raises(ParseError) as exc_info:
        parse_source("U0 F(I32 a, I32 b = 1) { }\nF(, 2);")
    assert "missing argument 'a'" in exc_info.value.detail


def test_recursion_is_rejected():
    with pytest.raises(ParseError):
        parse_source("I32 F(I32 n) { return F(n); }")


def test_forward_call_is_rejected():
    with pytest.raises(ParseError):
        parse_source("U0 A() { B; }\nU0 B() { }")


def test_calling_earlier_procedure():
    source = (
        "I32 Square(I32 n) { return n * n; }\n"
        "I32 SumSquares(I32 a, I32 b) { return Square(a) + Square(b); }\n"
        '"%d", SumSquares(3, 4);'
    )
    assert run_source(source) == "25"


def test_arguments_evaluate_in_caller_and_shadow_globals():
    source = (
        "I32 x = 5;\n"
        "I32 Twice(I32 x) { return x * 2; }\n"
        '"%d %d", Twice(x + 1), x;'
    )
    assert run_source(source) == "12 5"


def test_return_inside_for_inside_if_stops_body():
    source = (
        "U0 Scan() {\n"
        "  I32 i;\n"
        "  if (1 == 1) {\n"
        "    for (i = 0; i < 5; i++) {\n"
        "      if (i == 2) { return; }\n"
        '      "%d", i;\n'
        "    }\n"
        "  }\n"
        '  "after";\n'
        "}\n"
        "Scan;\n"
    )
    output = run_source(source)
    assert output == "01"
    assert "after" not in output


def test_return_value_is_coerced():
    assert run_source('U8 Big() { return 300; }\n"%d", Big();') == "44"


def test_missing_return_yields_zero():
    assert run_source('I32 Nothing() { I32 x = 1; }\n"%d", Nothing();') == "0"


def test_locals_are_reinitialized_per_call():
    source = 'I32 Count() { I32 n = 0; n++; return n; }\n"%d%d", Count(), Count();'
    assert run_source(source) == "11"


def test_return_outside_procedure():
    with pytest.raises(ParseError):
        parse_source("return 1;")


def test_nested_procedure_definition():
    with pytest.raises(ParseError):
        parse_source("U0 A() { U0 B() { } }")


def test_duplicate_parameter():
    with pytest.raises(ParseError):
        parse_source("U0 A(I32 x, I32 x) { }")


def test_locals_do_not_leak():
    with pytest.raises(ParseError):
        parse_source('U0 A() { I32 hidden = 1; }\n"%d", hidden;')


def test_class_parameter_reports_parameter_type():
    with pytest.raises(ParseError) as exc_info:
        parse_source("class Pt { I32 x; };\nU0 F(Pt p) { }")
    assert exc_info.value.token.text == "Pt"
    assert exc_info.value.line == 2
    assert exc_info.value.detail == "class parameters are not supported"
