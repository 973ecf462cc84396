"""
Tests for declarations, assignments and arithmetic in HolyC
"""
import pytest

from holyc.exceptions import ParseError, RuntimeFailure
from holyc.nodes import Assign, Declaration
from holyc.operations import Op

from holyc.tests.utils import parse_source, run_source


def test_decl_and_assign_ast_and_runtime():
    ast = parse_source("I32 x = 5;\nx += 2;\n")
    decl, assign = ast
    assert isinstance(decl, Declaration)
    assert isinstance(assign, Assign)
    symbol, initializer = decl.targets[0]
    assert symbol.name == 'x'
    assert symbol.type == 'I32'
    assert initializer is not None
    assert assign.op == Op.ADD_ASSIGN
    assert assign.target.symbol is symbol
    assert assign.line == 2

    assert run_source('I32 x = 5; x += 2; "%d", x;') == "7"


def test_multiple_declarations_default_to_zero():
    assert run_source('I32 a, b = 2, c; "%d %d %d", a, b, c;') == "0 2 0"


def test_arithmetic_is_left_to_right():
    assert run_source('I32 x = 2 + 3 * 4; "%d", x;') == "20"
    assert run_source('I32 x = 20 - 4 / 2; "%d", x;') == "8"


def test_parenthesised_group():
    assert run_source('I32 x = 2 + (3 * 4); "%d", x;') == "14"


def test_unary_minus():
    assert run_source('I32 x = -3 * 2; "%d", x;') == "-6"


def test_compound_assignments():
    source = 'I32 x = 10; x -= 4; x *= 3; x /= 2; "%d", x;'
    assert run_source(source) == "9"


def test_increment_and_decrement():
    source = 'I32 x = 1; x++; ++x; x--; "%d", x;'
    assert run_source(source) == "2"


def test_compound_operator_folds_with_chain_left_to_right():
    assert run_source('I32 x = 2; x *= 2 + 3; "%d", x;') == "7"
    assert run_source('I32 x = 20; x -= 4 / 2; "%d", x;') == "8"


def test_assignment_writes_back_after_each_step():
    assert run_source('I32 x = 1; x = x + x + x; "%d", x;') == "4"


def test_member_assignment_writes_back_after_each_step():
    source = 'class Pt { I32 x; }; Pt p; p.x = 3; p.x = p.x + p.x; p.x += 1 + p.x; "%d", p.x;'
    assert run_source(source) == "14"


def test_self_referential_initializer_sees_zero():
    assert run_source('I32 x = x + 1; "%d", x;') == "1"


def test_integer_types_wrap():
    assert run_source('U8 x = 255; x++; "%d", x;') == "0"
    assert run_source('I8 y = 127; y++; "%d", y;') == "-128"
    assert run_source('U16 z = 0; z--; "%d", z;') == "65535"


def test_integer_division_truncates_toward_zero():
    assert run_source('I32 q = 7 / 2; "%d", q;') == "3"
    assert run_source('I32 n = 0 - 7; n /= 2; "%d", n;') == "-3"


def test_float_division():
    assert run_source('F64 f = 1; f /= 4; "%f", f;') == "0.250000"


def test_bool_stores_zero_or_one():
    assert run_source('Bool b = 5; Bool c = FALSE; "%d%d", b, c;') == "10"


def test_division_by_zero():
    with pytest.raises(RuntimeFailure) as exc_info:
        run_source("I32 z = 1 / 0;")
    assert str(exc_info.value) == "Runtime failure: '1 / 0' division by zero in line 1"


def test_infinite_float_cannot_be_stored_in_integer():
    source = (
        "F64 x = 10.0;\n"
        "I32 i;\n"
        "for (i = 0; i < 400; i++) { x *= x; }\n"
        "I32 y = x;"
    )
    messages = []
    with pytest.raises(RuntimeFailure) as exc_info:
        run_source(source, on_error=messages.append)
    assert str(exc_info.value) == "Runtime failure: 'inf' cannot be converted in line 4"
    assert messages == [str(exc_info.value)]


def test_assign_without_decl_raises():
    with pytest.raises(ParseError) as exc_info:
        parse_source("x = 5;")
    assert str(exc_info.value) == "Parser failure: 'x' unexpected token in line 1"
    assert exc_info.value.detail == "'x' used before declaration"


def test_use_before_declaration_raises():
    with pytest.raises(ParseError):
        parse_source('"%d", y;\nI32 y;')


def test_redeclaration_raises():
    with pytest.raises(ParseError) as exc_info:
        parse_source("I32 x;\nF64 x;")
    assert exc_info.value.line == 2


def test_missing_semicolon():
    with pytest.raises(ParseError) as exc_info:
        parse_source("I32 x = 1")
    assert exc_info.value.token.kind == 'EOF'


def test_define_constant():
    assert run_source('#define MAX 10\nI32 x = MAX * 2; "%d", x;') == "20"
    assert run_source('#define GREETING "hello";\n"%s", GREETING;') == "hello"


def test_define_is_read_only():
    with pytest.raises(ParseError):
        parse_source("#define MAX 10\nMAX = 3;")


def test_string_variables():
    assert run_source('U0 name = "Terry"; "Hi %s", name;') == "Hi Terry"
