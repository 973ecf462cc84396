"""
Expression parsing utilities for HolyC.

These functions operate on a `holyc.parser.parser.Parser` instance.
Arithmetic is a flat chain of operands evaluated strictly left to right, so
there is no precedence ladder here; logical expressions are a flat list of
comparisons joined by ``&&`` and ``||``, composed only at evaluation time.

Identifiers are resolved as they are read. Whether an identifier starts a
procedure call is decided by the prototype table, not by the syntax.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from holyc.exceptions import ParseError
from holyc.nodes import (
    Call,
    Chain,
    Comparison,
    Condition,
    Member,
    Negate,
    Number,
    String,
    Var,
)
from holyc.operations import ARITHMETIC, COMPARISON, LOGICAL

if TYPE_CHECKING:
    from holyc.parser import Parser


def parse_number(text: str):
    """Convert number literal text to an int or float."""
    return float(text) if '.' in text else int(text)


def resolve(parser: 'Parser', tok):
    """
    Return the symbol an identifier token refers to.

    Raises:
        ParseError: If the name was not declared before this point.
    """
    symbol = parser.tables.resolve(tok.text, parser.prototype)
    if symbol is None:
        raise ParseError(tok, f"'{tok.text}' used before declaration")
    return symbol


def parse_member(parser: 'Parser', symbol, tok) -> Member:
    """
    Collapse ``name.field.field`` into one dotted path on a class instance.

    Syntax:
        <identifier> ( . <identifier> )+
    """
    class_type = symbol.class_type
    type_name = symbol.type
    path = []
    while parser.curr_token.kind == 'DOT':
        dot_tok = parser.eat('DOT')
        if class_type is None:
            raise ParseError(dot_tok, f"'{'.'.join([tok.text, *path])}' is not a class instance")
        field_tok = parser.eat('ID')
        found = class_type.get_field(field_tok.text)
        if found is None:
            raise ParseError(field_tok, f"class {class_type.name} has no field '{field_tok.text}'")
        path.append(found.name)
        type_name = found.type
        class_type = found.class_type
    if class_type is not None:
        raise ParseError(tok, f"'{'.'.join([tok.text, *path])}' is a class instance, not a value")
    return Member(symbol, '.'.join(path), type_name, tok.line)


def parse_target(parser: 'Parser'):
    """
    Parse the left-hand side of an assignment.

    Syntax:
        <identifier> | <identifier>.<identifier>...
    """
    tok = parser.eat('ID')
    symbol = resolve(parser, tok)
    if parser.curr_token.kind == 'DOT':
        return parse_member(parser, symbol, tok)
    if symbol.class_type is not None:
        raise ParseError(tok, f"'{tok.text}' is a class instance, not a value")
    if symbol.constant:
        raise ParseError(tok, f"'{tok.text}' is a constant")
    return Var(symbol, tok.line)


def parse_call(parser: 'Parser') -> Call:
    """
    Parse a procedure call and bind its arguments by position.

    Syntax:
        <identifier> ( [<chain>] , ... ) | <identifier>

    A position may be left empty, and trailing positions omitted, only when
    that parameter declares a default.
    """
    tok = parser.eat('ID')
    prototype = parser.tables.prototypes[tok.text]
    args = []
    if parser.curr_token.kind == 'LPAREN':
        parser.eat('LPAREN')
        if parser.curr_token.kind != 'RPAREN':
            while True:
                if parser.curr_token.kind in ('COMMA', 'RPAREN'):
                    args.append(None)
                else:
                    args.append(parser.chain())
                if parser.curr_token.kind != 'COMMA':
                    break
                parser.eat('COMMA')
        parser.eat('RPAREN')

    if len(args) > len(prototype.params):
        raise ParseError(
            tok,
            f"{prototype.name} takes {len(prototype.params)} argument(s) but {len(args)} were given",
        )
    for index, param in enumerate(prototype.params):
        supplied = index < len(args) and args[index] is not None
        if not supplied and not param.has_default:
            raise ParseError(tok, f"missing argument '{param.symbol.name}' for {prototype.name}")
    return Call(prototype, args, tok.line)


def parse_operand(parser: 'Parser'):
    """Parse a literal, variable, member path, call, negation or group."""
    tok = parser.curr_token
    if tok.kind == 'NUMBER':
        parser.eat('NUMBER')
        return Number(parse_number(tok.text), tok.line)

    if tok.kind == 'STRING':
        parser.eat('STRING')
        return String(tok.text, tok.line)

    if tok.kind in ('TRUE', 'FALSE'):
        parser.eat(tok.kind)
        return Number(1 if tok.kind == 'TRUE' else 0, tok.line)

    if tok.kind == 'MINUS':
        parser.eat('MINUS')
        return Negate(parser.operand(), tok.line)

    if tok.kind == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.chain()
        parser.eat('RPAREN')
        return node

    if tok.kind == 'ID':
        symbol = parser.tables.resolve(tok.text, parser.prototype)
        if symbol is None and tok.text in parser.tables.prototypes:
            return parser.call()
        symbol = resolve(parser, tok)
        parser.eat('ID')
        if parser.curr_token.kind == 'DOT':
            return parse_member(parser, symbol, tok)
        if symbol.class_type is not None:
            raise ParseError(tok, f"'{tok.text}' is a class instance, not a value")
        return Var(symbol, tok.line)

    raise ParseError(tok, "expected an operand")


def parse_chain(parser: 'Parser') -> Chain:
    """Parse operands joined by '+', '-', '*' and '/'."""
    tok = parser.curr_token
    first = parser.operand()
    rest = []
    while parser.curr_token.kind in ARITHMETIC:
        op = ARITHMETIC[parser.curr_token.kind]
        parser.eat(parser.curr_token.kind)
        rest.append((op, parser.operand()))
    return Chain(first, rest, tok.line)


def parse_comparison(parser: 'Parser') -> Comparison:
    """Parse '!'* chain (comparison chain)*."""
    tok = parser.curr_token
    negated = False
    while parser.curr_token.kind == 'NOT':
        parser.eat('NOT')
        negated = not negated
    first = parser.chain()
    rest = []
    while parser.curr_token.kind in COMPARISON:
        op = COMPARISON[parser.curr_token.kind]
        parser.eat(parser.curr_token.kind)
        rest.append((op, parser.chain()))
    return Comparison(negated, first, rest, tok.line)


# ---- Entry point ----

def parse_condition(parser: 'Parser') -> Condition:
    """Parse comparisons joined by '&&' and '||' into a flat list."""
    tok = parser.curr_token
    terms = [parser.comparison()]
    joins = []
    while parser.curr_token.kind in LOGICAL:
        joins.append(LOGICAL[parser.curr_token.kind])
        parser.eat(parser.curr_token.kind)
        terms.append(parser.comparison())
    return Condition(terms, joins, tok.line)
