"""
Tests for output strings in HolyC
"""
import pytest

from holyc.exceptions import RuntimeFailure
from holyc.interpreter import decode_escapes
from holyc.nodes import Print

from holyc.tests.utils import parse_source, run_source


def test_literal_round_trip():
    assert run_source('"abc";') == "abc"
    assert run_source("'abc';") == "abc"


def test_escapes_are_decoded_at_output():
    ast = parse_source('"a\\nb";')
    assert isinstance(ast[0], Print)
    assert ast[0].format == "a\\nb"
    assert run_source('"a\\nb";') == "a\nb"
    assert run_source('"a\\tb";') == "a\tb"


def test_unknown_escape_is_kept():
    assert decode_escapes("a\\qb") == "a\\qb"


def test_placeholders_in_order():
    assert run_source('"%d + %d = %d", 1, 2, 1 + 2;') == "1 + 2 = 3"


def test_percent_literal():
    assert run_source('"%d%%", 100;') == "100%"


def test_hex_and_float_placeholders():
    assert run_source('"%x %i", 255, 7;') == "ff 7"
    assert run_source('F64 f = 1.5; "%f", f;') == "1.500000"


def test_leftover_arguments_are_appended():
    assert run_source('"x=", 5;') == "x=5"


def test_missing_arguments_keep_placeholder():
    assert run_source('"%d and %d", 1;') == "1 and %d"


def test_string_concatenation():
    assert run_source('"%s", "a" + "b";') == "ab"


def test_call_results_in_output():
    source = 'I32 Three() { return 3; }\n"%d\\n", Three;'
    assert run_source(source) == "3\n"


def test_output_is_streamed():
    pieces = []
    output = run_source('"one"; "two";', on_output=pieces.append)
    assert pieces == ["one", "two"]
    assert output == "onetwo"


def test_quote_escapes_inside_other_quotes():
    assert run_source("'say \\\"hi\\\"';") == 'say "hi"'
    assert run_source('"it\\\'s";') == "it's"


def test_infinite_float_with_integer_placeholder():
    source = 'F64 x = 10.0; I32 i; for (i = 0; i < 400; i++) { x *= x; }\n"%d", x;'
    with pytest.raises(RuntimeFailure) as exc_info:
        run_source(source)
    assert str(exc_info.value) == "Runtime failure: 'inf' cannot be converted in line 2"
