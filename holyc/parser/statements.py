"""Statement parsing utilities for HolyC.

These functions operate on a `holyc.parser.parser.Parser` instance and
handle the various statement forms in the language such as blocks,
output strings, conditionals, loops, assignments and calls.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from holyc.exceptions import ParseError
from holyc.lexer import TYPE_KEYWORDS
from holyc.nodes import Assign, CallStmt, For, If, IncDec, Js, Print, Return
from holyc.operations import ASSIGNMENT, STEP

if TYPE_CHECKING:
    from holyc.parser import Parser

TYPE_KINDS = frozenset(TYPE_KEYWORDS.values())


def parse_block(parser: 'Parser') -> list:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        list: The statements of the block.
    """
    parser.eat('LBRACE')
    statements = []
    while parser.curr_token.kind != 'RBRACE':
        statements.append(parser.statement())
    parser.eat('RBRACE')
    return statements


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement.

    Syntax:
        <statement>

    Args:
        parser: The parser instance.

    Returns:
        The statement node.
    """
    tok = parser.curr_token
    if tok.kind in TYPE_KINDS:
        return parser.parse_declaration()
    elif tok.kind == 'STRING':
        return parser.parse_print()
    elif tok.kind == 'FOR':
        return parser.parse_for()
    elif tok.kind == 'IF':
        return parser.parse_if()
    elif tok.kind == 'RETURN':
        return parser.parse_return()
    elif tok.kind == 'CLASS':
        return parser.parse_class()
    elif tok.kind == 'DEFINE':
        return parser.parse_define()
    elif tok.kind == 'JS':
        return parser.parse_js()
    elif tok.kind in ('INC', 'DEC'):
        stmt = parser.step()
        parser.eat('SEMI')
        return stmt
    elif tok.kind == 'ID':
        tables = parser.tables
        if tok.text in tables.classes:
            return parser.parse_declaration()
        if tables.resolve(tok.text, parser.prototype) is None and tok.text in tables.prototypes:
            call = parser.call()
            parser.eat('SEMI')
            return CallStmt(call, tok.line)
        stmt = parser.step()
        parser.eat('SEMI')
        return stmt
    else:
        raise ParseError(tok, "unexpected token at start of statement")


def parse_step(parser: 'Parser'):
    """
    Parse an assignment or increment/decrement, without the semicolon.

    Syntax:
        <target> (= | += | -= | *= | /=) <chain>
        <target>++ | <target>-- | ++<target> | --<target>

    Args:
        parser: The parser instance.

    Returns:
        Assign | IncDec: The statement node.
    """
    tok = parser.curr_token
    if tok.kind in STEP:
        parser.eat(tok.kind)
        return IncDec(parser.target(), STEP[tok.kind], tok.line)

    target = parser.target()
    op_tok = parser.curr_token
    if op_tok.kind in STEP:
        parser.eat(op_tok.kind)
        return IncDec(target, STEP[op_tok.kind], tok.line)
    if op_tok.kind in ASSIGNMENT:
        parser.eat(op_tok.kind)
        return Assign(target, ASSIGNMENT[op_tok.kind], parser.chain(), tok.line)
    raise ParseError(op_tok, "expected an assignment")


def parse_print(parser: 'Parser') -> Print:
    """
    Parse a string output statement.

    Syntax:
        "<format>" [, <chain>]* ;

    Args:
        parser: The parser instance.

    Returns:
        Print: The format string and its ordered arguments.
    """
    tok = parser.eat('STRING')
    args = []
    while parser.curr_token.kind == 'COMMA':
        parser.eat('COMMA')
        args.append(parser.chain())
    parser.eat('SEMI')
    return Print(tok.text, args, tok.line)


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional 'if' statement with optional else or else-if.

    Syntax:
        if ( <condition> ) { <block> }
        else if ( <condition> ) { <block> }
        else { <block> }

    Args:
        parser: The parser instance.

    Returns:
        If: The statement node; an else-if is an If inside ``orelse``.
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN')
    condition = parser.condition()
    parser.eat('RPAREN')
    then_block = parser.block()

    else_block = []
    if parser.curr_token.kind == 'ELSE':
        parser.eat('ELSE')
        if parser.curr_token.kind == 'IF':
            else_block = [parser.parse_if()]
        else:
            else_block = parser.block()

    return If(condition, then_block, else_block, tok.line)


def parse_for(parser: 'Parser') -> For:
    """
    Parse a 'for' loop.

    Syntax:
        for ( <assignment> ; <condition> ; <step> ) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        For: The statement node.
    """
    tok = parser.eat('FOR')
    parser.eat('LPAREN')
    init = parser.step()
    parser.eat('SEMI')
    condition = parser.condition()
    parser.eat('SEMI')
    step = parser.step()
    parser.eat('RPAREN')
    body = parser.block()
    return For(init, condition, step, body, tok.line)


def parse_return(parser: 'Parser') -> Return:
    """
    Parse a 'return' statement.

    Syntax:
        return [<chain>] ;

    Args:
        parser: The parser instance.

    Returns:
        Return: The statement node, bound to the enclosing procedure.
    """
    tok = parser.eat('RETURN')
    if parser.prototype is None:
        raise ParseError(tok, "return outside of a procedure")
    value = None
    if parser.curr_token.kind != 'SEMI':
        value = parser.chain()
    parser.eat('SEMI')
    return Return(value, parser.prototype, tok.line)


def parse_js(parser: 'Parser') -> Js:
    """
    Parse a foreign-code block captured by the lexer.

    Syntax:
        js { <raw text> } ;
    """
    tok = parser.eat('JS')
    parser.eat('SEMI')
    return Js(tok.text, tok.line)
