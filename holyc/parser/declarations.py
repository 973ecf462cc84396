"""Declaration parsing utilities for HolyC.

Variables, procedure definitions, classes and ``#define`` constants. Each
name is entered into the symbol tables the moment it is read, so an
initializer already sees its own (zero-valued) variable and a redeclaration
is reported at the offending name.


File: declarations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from holyc.exceptions import ParseError
from holyc.nodes import ClassDef, Declaration, Define, Number, ProcDef, String
from holyc.symbols import ClassType, Field

from .expressions import parse_number
from .statements import TYPE_KINDS

if TYPE_CHECKING:
    from holyc.parser import Parser


def declare(parser: 'Parser', name_tok, type_name: str, class_type=None):
    """
    Enter a variable into the table of the current scope.

    Raises:
        ParseError: If the name is already declared in that scope.
    """
    if parser.tables.is_declared(name_tok.text, parser.prototype):
        raise ParseError(name_tok, f"'{name_tok.text}' redeclared")
    scope = parser.tables.scope_for(parser.prototype)
    return scope.declare(name_tok.text, type_name, name_tok.line, class_type)


def parse_type(parser: 'Parser'):
    """
    Consume a type keyword or a class name.

    Returns:
        tuple: The type's text and its ClassType, if it names a class.
    """
    tok = parser.curr_token
    if tok.kind in TYPE_KINDS:
        parser.eat(tok.kind)
        return tok.text, None
    if tok.kind == 'ID' and tok.text in parser.tables.classes:
        parser.eat('ID')
        return tok.text, parser.tables.classes[tok.text]
    raise ParseError(tok, "expected a type")


def parse_literal(parser: 'Parser'):
    """
    Consume a constant literal and return its value.

    Syntax:
        <number> | -<number> | <string> | TRUE | FALSE
    """
    tok = parser.curr_token
    if tok.kind == 'MINUS':
        parser.eat('MINUS')
        return -parse_number(parser.eat('NUMBER').text)
    if tok.kind == 'NUMBER':
        parser.eat('NUMBER')
        return parse_number(tok.text)
    if tok.kind == 'STRING':
        parser.eat('STRING')
        return tok.text
    if tok.kind in ('TRUE', 'FALSE'):
        parser.eat(tok.kind)
        return 1 if tok.kind == 'TRUE' else 0
    raise ParseError(tok, "expected a literal")


def parse_declaration(parser: 'Parser'):
    """
    Parse a type-led statement.

    Syntax:
        <type> <identifier> [= <chain>] [, <identifier> [= <chain>]]* ;
        <type> <identifier> ( <params> ) { <block> }

    Args:
        parser: The parser instance.

    Returns:
        Declaration | ProcDef: The statement node.
    """
    type_tok = parser.curr_token
    type_name, class_type = parse_type(parser)
    if parser.curr_token.kind == 'ID' and parser.peek().kind == 'LPAREN':
        if class_type is not None:
            raise ParseError(type_tok, "procedures cannot return a class")
        return parse_proc_def(parser, type_tok)

    targets = []
    while True:
        name_tok = parser.curr_token
        if name_tok.kind != 'ID':
            raise ParseError(name_tok, "expected an identifier")
        symbol = declare(parser, name_tok, type_name, class_type)
        parser.eat('ID')
        initializer = None
        if parser.curr_token.kind == 'ASSIGN':
            if class_type is not None:
                raise ParseError(parser.curr_token, "class instances cannot be initialized")
            parser.eat('ASSIGN')
            initializer = parser.chain()
        targets.append((symbol, initializer))
        if parser.curr_token.kind != 'COMMA':
            break
        parser.eat('COMMA')
    parser.eat('SEMI')
    return Declaration(type_name, targets, type_tok.line)


def parse_proc_def(parser: 'Parser', type_tok) -> ProcDef:
    """
    Parse a procedure definition.

    Syntax:
        <type> <name> ( [<type> <identifier> [= <literal>]] , ... ) { <block> }

    The prototype is published only once its body has been parsed, so a
    procedure cannot call itself or anything defined after it.

    Args:
        parser: The parser instance.
        type_tok: The return type token.

    Returns:
        ProcDef: The statement node.
    """
    name_tok = parser.curr_token
    if parser.prototype is not None:
        raise ParseError(name_tok, "procedures can only be defined at top level")
    if parser.tables.is_declared(name_tok.text, None):
        raise ParseError(name_tok, f"'{name_tok.text}' redeclared")
    parser.eat('ID')
    parser.eat('LPAREN')

    prototype = parser.tables.new_prototype(name_tok.text, type_tok.text, name_tok.line)
    if parser.curr_token.kind != 'RPAREN':
        while True:
            param_type_tok = parser.curr_token
            param_type, class_type = parse_type(parser)
            if class_type is not None:
                raise ParseError(param_type_tok, "class parameters are not supported")
            param_tok = parser.curr_token
            if param_tok.kind != 'ID':
                raise ParseError(param_tok, "expected a parameter name")
            if param_tok.text in prototype.args or parser.tables.is_declared(param_tok.text, prototype):
                raise ParseError(param_tok, f"'{param_tok.text}' redeclared")
            param = prototype.add_param(param_tok.text, param_type, param_tok.line)
            parser.eat('ID')
            if parser.curr_token.kind == 'ASSIGN':
                parser.eat('ASSIGN')
                param.default = parse_literal(parser)
                param.has_default = True
            if parser.curr_token.kind != 'COMMA':
                break
            parser.eat('COMMA')
    parser.eat('RPAREN')

    parser.prototype = prototype
    try:
        prototype.body = parser.block()
    finally:
        parser.prototype = None
    parser.tables.publish(prototype)
    return ProcDef(prototype, name_tok.line)


def parse_class(parser: 'Parser') -> ClassDef:
    """
    Parse a class definition.

    Syntax:
        class <name> { (<type> <identifier> [, <identifier>]* ;)* } [<identifier>, ...] ;

    Args:
        parser: The parser instance.

    Returns:
        ClassDef: The class type and the optional instance declaration.
    """
    tok = parser.eat('CLASS')
    name_tok = parser.curr_token
    if name_tok.kind != 'ID':
        raise ParseError(name_tok, "expected a class name")
    if parser.tables.is_declared(name_tok.text, None):
        raise ParseError(name_tok, f"'{name_tok.text}' redeclared")
    parser.eat('ID')

    class_type = ClassType(name_tok.text, name_tok.line)
    parser.eat('LBRACE')
    while parser.curr_token.kind != 'RBRACE':
        field_type, field_class = parse_type(parser)
        while True:
            field_tok = parser.curr_token
            if field_tok.kind != 'ID':
                raise ParseError(field_tok, "expected a field name")
            if class_type.get_field(field_tok.text) is not None:
                raise ParseError(field_tok, f"'{field_tok.text}' redeclared")
            class_type.fields.append(Field(field_tok.text, field_type, field_class))
            parser.eat('ID')
            if parser.curr_token.kind != 'COMMA':
                break
            parser.eat('COMMA')
        parser.eat('SEMI')
    parser.eat('RBRACE')
    parser.tables.classes[class_type.name] = class_type

    instance = None
    if parser.curr_token.kind == 'ID':
        targets = []
        while True:
            instance_tok = parser.curr_token
            if instance_tok.kind != 'ID':
                raise ParseError(instance_tok, "expected an identifier")
            targets.append((declare(parser, instance_tok, class_type.name, class_type), None))
            parser.eat('ID')
            if parser.curr_token.kind != 'COMMA':
                break
            parser.eat('COMMA')
        instance = Declaration(class_type.name, targets, name_tok.line)
    parser.eat('SEMI')
    return ClassDef(class_type, instance, tok.line)


def parse_define(parser: 'Parser') -> Define:
    """
    Parse a constant definition.

    Syntax:
        #define <identifier> <literal> [;]

    Args:
        parser: The parser instance.

    Returns:
        Define: The statement node; the constant lives in the global table.
    """
    tok = parser.eat('DEFINE')
    name_tok = parser.curr_token
    if name_tok.kind != 'ID':
        raise ParseError(name_tok, "expected a constant name")
    tables = parser.tables
    if tables.is_declared(name_tok.text, None) or tables.is_declared(name_tok.text, parser.prototype):
        raise ParseError(name_tok, f"'{name_tok.text}' redeclared")
    parser.eat('ID')

    value_tok = parser.curr_token
    value = parse_literal(parser)
    if isinstance(value, str):
        literal, type_name = String(value, value_tok.line), 'U0'
    else:
        literal, type_name = Number(value, value_tok.line), 'F64' if isinstance(value, float) else 'I64'
    if parser.curr_token.kind == 'SEMI':
        parser.eat('SEMI')

    symbol = tables.globals.declare(name_tok.text, type_name, name_tok.line, constant=True)
    return Define(symbol, literal, tok.line)
