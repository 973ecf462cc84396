"""
Tests for the HolyC lexer.
"""
import pytest

from holyc.exceptions import IncludeError, LexError
from holyc.lexer import MAX_INCLUDES, Token, tokenize


def kinds(tokens):
    return [tok.kind for tok in tokens]


def test_declaration_tokens():
    tokens = tokenize("I32 x = 5;")
    assert kinds(tokens) == ['I32', 'ID', 'ASSIGN', 'NUMBER', 'SEMI', 'EOF']
    assert tokens[1] == Token('ID', 'x', 1)
    assert tokens[3].text == '5'


def test_keywords_need_exact_match():
    tokens = tokenize("I32x Bool for fore TRUE")
    assert kinds(tokens) == ['ID', 'BOOL', 'FOR', 'ID', 'TRUE', 'EOF']


def test_two_character_operators_win():
    tokens = tokenize("a++ b -= c != d <= e && f || g")
    assert kinds(tokens)[:-1] == [
        'ID', 'INC', 'ID', 'MINUS_ASSIGN', 'ID', 'NE', 'ID',
        'LE', 'ID', 'AND', 'ID', 'OR', 'ID',
    ]


def test_float_literal():
    tokens = tokenize("F64 f = 2.75;")
    assert tokens[3] == Token('NUMBER', '2.75', 1)


def test_comments_keep_line_numbers():
    tokens = tokenize("// first\n/* second\nthird */ I32 x;")
    assert tokens[0] == Token('I32', 'I32', 3)


def test_strings_are_captured_raw():
    tokens = tokenize('"a\\nb" \'single\'')
    assert tokens[0] == Token('STRING', 'a\\nb', 1)
    assert tokens[1] == Token('STRING', 'single', 1)


def test_unrecognized_character():
    with pytest.raises(LexError) as exc_info:
        tokenize("I32 x = @;")
    assert str(exc_info.value) == "Lexer failure: '@' unexpected token in line 1"


def test_lone_ampersand_is_rejected():
    with pytest.raises(LexError):
        tokenize("if (a & b) {}")


def test_unterminated_string():
    with pytest.raises(LexError) as exc_info:
        tokenize('I32 x;\n"never closed;')
    assert exc_info.value.line == 2
    assert exc_info.value.detail == "unterminated literal"


def test_unterminated_block_comment():
    with pytest.raises(LexError):
        tokenize("/* open")


def test_unknown_directive():
    with pytest.raises(LexError):
        tokenize("#pragma once")


def test_define_directive():
    tokens = tokenize("#define MAX 10")
    assert kinds(tokens) == ['DEFINE', 'ID', 'NUMBER', 'EOF']


def test_js_block_is_one_raw_token():
    tokens = tokenize("js { var o = {a: 1}; }; I32 x;")
    assert tokens[0] == Token('JS', ' var o = {a: 1}; ', 1)
    assert kinds(tokens) == ['JS', 'SEMI', 'I32', 'ID', 'SEMI', 'EOF']


def test_js_block_counts_lines():
    tokens = tokenize("js {\n  a();\n};\nI32 x;")
    assert tokens[0].line == 1
    assert tokens[2] == Token('I32', 'I32', 4)


def test_unterminated_js_block():
    with pytest.raises(LexError):
        tokenize("js { if (x) { }")


def test_include_splices_fetched_text():
    async def fetch(path):
        assert path == "lib.hc"
        return "I32 y;"

    spliced = tokenize('#include "lib.hc"\nI32 x;', fetch)
    assert spliced == tokenize("I32 y;\nI32 x;")


def test_include_restarts_line_numbers():
    async def fetch(path):
        return "I32 y;"

    tokens = tokenize('I32 a;\n\n#include "lib.hc"\nI32 x;', fetch)
    assert [tok.line for tok in tokens if tok.kind == 'I32'] == [1, 1, 2]


def test_include_without_fetcher():
    with pytest.raises(IncludeError):
        tokenize('#include "lib.hc"')


def test_include_fetch_failure():
    async def fetch(path):
        raise FileNotFoundError(path)

    with pytest.raises(IncludeError) as exc_info:
        tokenize('#include "missing.hc"', fetch)
    assert str(exc_info.value) == "Include failure: 'missing.hc' could not be fetched in line 1"


def test_self_include_is_bounded():
    calls = []

    async def fetch(path):
        calls.append(path)
        return '#include "self.hc"'

    with pytest.raises(IncludeError):
        tokenize('#include "self.hc"', fetch)
    assert len(calls) == MAX_INCLUDES
