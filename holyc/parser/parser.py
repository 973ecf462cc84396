"""
Main parser entry point for HolyC.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`holyc.parser.expressions`, `holyc.parser.statements` and
`holyc.parser.declarations`.

Names are resolved while parsing: every declaration is entered into the
symbol tables as soon as it is read, and every identifier used afterwards
must already be there.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from typing import Optional

from holyc.exceptions import ParseError
from holyc.lexer import TOKEN_LITERALS, Token
from holyc.symbols import Prototype, SymbolTables

from . import declarations as _decl
from . import expressions as _expr
from . import statements as _stmt

logger = logging.getLogger(__name__)


class Parser:
    """HolyC parser."""

    def __init__(self, tokens: list[Token], tables: Optional[SymbolTables] = None,
                 file: str = "<input>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances, normally ending with ``EOF``.
            tables (SymbolTables): Tables to declare into; fresh ones when omitted.
            file (str): The name of the script.
        """
        if not tokens or tokens[-1].kind != 'EOF':
            eof_line = tokens[-1].line if tokens else 1
            tokens = [*tokens, Token('EOF', None, eof_line)]
        self.tokens = tokens
        self.tables = tables if tables is not None else SymbolTables()
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.source_file = file
        # Procedure whose body is being parsed, None at top level.
        self.prototype: Optional[Prototype] = None

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` positions ahead without consuming anything.
        """
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def eat(self, kind: str) -> Token:
        """
        Consume the current token if it matches the expected kind.

        Parameters:
            kind (str): The expected token kind.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected kind.
        """
        tok = self.curr_token
        if tok.kind != kind:
            raise ParseError(tok, f"expected '{TOKEN_LITERALS.get(kind, kind)}'")
        if self.position < len(self.tokens) - 1:
            self.position += 1
        self.curr_token = self.tokens[self.position]
        return tok


    # Expression wrappers
    def operand(self):
        """
        Parse a single operand: literal, variable, member, call or group.
        """
        return _expr.parse_operand(self)

    def chain(self):
        """
        Parse a flat arithmetic chain.
        """
        return _expr.parse_chain(self)

    def comparison(self):
        """
        Parse an optionally negated comparison.
        """
        return _expr.parse_comparison(self)

    def condition(self):
        """
        Parse a logical expression.
        """
        return _expr.parse_condition(self)

    def call(self):
        """
        Parse a procedure call and check its arguments against the prototype.
        """
        return _expr.parse_call(self)

    def target(self):
        """
        Parse an assignable variable or member path.
        """
        return _expr.parse_target(self)


    # Statement wrappers
    def block(self) -> list:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def step(self):
        """
        Parse an assignment or increment without its semicolon.
        """
        return _stmt.parse_step(self)

    def parse_print(self):
        """
        Parse a string output statement.
        """
        return _stmt.parse_print(self)

    def parse_if(self):
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_for(self):
        """
        Parse a 'for' loop.
        """
        return _stmt.parse_for(self)

    def parse_return(self):
        """
        Parse a 'return' statement from within a procedure.
        """
        return _stmt.parse_return(self)

    def parse_js(self):
        """
        Parse a foreign-code block.
        """
        return _stmt.parse_js(self)


    # Declaration wrappers
    def parse_declaration(self):
        """
        Parse a type-led statement: variables or a procedure definition.
        """
        return _decl.parse_declaration(self)

    def parse_class(self):
        """
        Parse a class definition with an optional instance.
        """
        return _decl.parse_class(self)

    def parse_define(self):
        """
        Parse a '#define' constant.
        """
        return _decl.parse_define(self)


    def parse(self) -> list:
        """
        Parse the full input into a list of statements.
        """
        statements = []
        while self.curr_token.kind != 'EOF':
            statements.append(self.statement())
        logger.debug("Parsed %d top-level statement(s) from %s", len(statements), self.source_file)
        return statements
