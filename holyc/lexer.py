"""Lexer for HolyC.

The lexer performs a single forward pass over the source using a combined
regular expression of named groups, matched at the current cursor. Each match
yields a :class:`Token` containing its kind, literal text and source line.

Tokens cover literals (numbers, strings), the fixed-width type keywords,
statement keywords (``for``, ``if``, ``class`` …), operators and punctuation.
``//`` line comments and ``/* … */`` block comments are skipped while keeping
line numbers accurate. Quoted literals are captured raw; escape sequences are
decoded later, when the interpreter writes output.

Two constructs leave the regular scan:

- ``js { … }`` switches to raw capture and copies the text between the
  matching braces verbatim into a single ``JS`` token.
- ``#include "path"`` awaits the include fetcher, splices the fetched text in
  front of the remaining input and restarts the cursor and line counter on
  the spliced buffer.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from holyc.exceptions import IncludeError, LexError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]

# Upper bound on splices per run; self-including sources never terminate.
MAX_INCLUDES = 64


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token with a kind, literal text and source line.
    """
    kind: str
    text: Optional[str]
    line: int

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.kind}, {self.text!r}, line={self.line})"


TYPE_KEYWORDS = {
    'I0': 'I0',
    'U0': 'U0',
    'I8': 'I8',
    'U8': 'U8',
    'I16': 'I16',
    'U16': 'U16',
    'I32': 'I32',
    'U32': 'U32',
    'I64': 'I64',
    'U64': 'U64',
    'F64': 'F64',
    'Bool': 'BOOL',
}

KEYWORDS = {
    'for': 'FOR',
    'class': 'CLASS',
    'if': 'IF',
    'else': 'ELSE',
    'return': 'RETURN',
    'TRUE': 'TRUE',
    'FALSE': 'FALSE',
    'js': 'JS',
}

DIRECTIVES = {
    '#define': 'DEFINE',
    '#include': 'INCLUDE',
}

TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Layout and comments
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r\f\v]+'),
    ('COMMENT',       r'//[^\n]*'),
    ('BLOCK_COMMENT', r'/\*[\s\S]*?\*/'),
    ('OPEN_COMMENT',  r'/\*'),

    # Literals
    ('STRING',        r'"[^"]*"|\'[^\']*\''),
    ('UNTERMINATED',  r'["\']'),
    ('NUMBER',        r'\d+(?:\.\d+)?'),

    # Directives, keywords and identifiers
    ('DIRECTIVE',     r'\#[A-Za-z_]+'),
    ('ID',            r'[A-Za-z_][A-Za-z0-9_]*'),

    # Two-character operators
    ('INC',           r'\+\+'),
    ('DEC',           r'--'),
    ('PLUS_ASSIGN',   r'\+='),
    ('MINUS_ASSIGN',  r'-='),
    ('MUL_ASSIGN',    r'\*='),
    ('DIV_ASSIGN',    r'/='),
    ('EQ',            r'=='),
    ('NE',            r'!='),
    ('LE',            r'<='),
    ('GE',            r'>='),
    ('AND',           r'&&'),
    ('OR',            r'\|\|'),

    # Single-character operators
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('MUL',           r'\*'),
    ('DIV',           r'/'),
    ('ASSIGN',        r'='),
    ('LT',            r'<'),
    ('GT',            r'>'),
    ('NOT',           r'!'),

    # Punctuation
    ('SEMI',          r';'),
    ('COMMA',         r','),
    ('DOT',           r'\.'),
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),

    # Anything else
    ('MISMATCH',      r'.'),
]

_TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)
_STRING_REGEX = re.compile(r'"[^"]*"|\'[^\']*\'')
_WHITESPACE = re.compile(r'\s*')

# Literal spelling of each token kind, used for error details.
TOKEN_LITERALS: dict[str, str] = {
    name: re.sub(r'\\', '', pattern)
    for name, pattern in TOKEN_SPECIFICATION
    if name not in ('STRING', 'UNTERMINATED', 'OPEN_COMMENT', 'MISMATCH')
    and re.fullmatch(r'(?:\\?[^\w\s\\])+', pattern)
}
TOKEN_LITERALS.update({kind: text for text, kind in TYPE_KEYWORDS.items()})
TOKEN_LITERALS.update({kind: text for text, kind in KEYWORDS.items()})
TOKEN_LITERALS.update({kind: text for text, kind in DIRECTIVES.items()})


class Lexer:
    """
    Forward scanner over a mutable source buffer.
    """

    def __init__(self, code: str, fetch: Optional[Fetcher] = None):
        """
        Initialize the lexer.

        Parameters:
            code (str): The source code to tokenize.
            fetch (callable): Awaitable include fetcher, ``await fetch(path) -> str``.
        """
        self.buffer = code
        self.fetch = fetch
        self.position = 0
        self.line = 1
        self.includes = 0

    async def tokenize(self) -> list[Token]:
        """
        Scan the whole buffer and return its tokens, terminated by ``EOF``.

        Raises:
            LexError: On an unrecognized character or unterminated literal.
            IncludeError: If an include directive cannot be fetched.
        """
        tokens: list[Token] = []
        while self.position < len(self.buffer):
            match_obj = _TOKEN_REGEX.match(self.buffer, self.position)
            kind = match_obj.lastgroup
            value = match_obj.group()
            self.position = match_obj.end()

            if kind == 'NEWLINE':
                self.line += 1
                continue
            if kind in ('SKIP', 'COMMENT'):
                continue
            if kind == 'BLOCK_COMMENT':
                self.line += value.count('\n')
                continue
            if kind == 'OPEN_COMMENT':
                raise LexError(value, self.line, detail="unterminated comment")
            if kind == 'UNTERMINATED':
                raise LexError(value, self.line, detail="unterminated literal")
            if kind == 'MISMATCH':
                raise LexError(value, self.line)

            if kind == 'STRING':
                tokens.append(Token('STRING', value[1:-1], self.line))
                self.line += value.count('\n')
            elif kind == 'ID':
                if value == 'js':
                    tokens.append(self._capture_raw())
                else:
                    kind = TYPE_KEYWORDS.get(value) or KEYWORDS.get(value, 'ID')
                    tokens.append(Token(kind, value, self.line))
            elif kind == 'DIRECTIVE':
                directive = DIRECTIVES.get(value)
                if directive is None:
                    raise LexError(value, self.line, detail="unknown directive")
                if directive == 'INCLUDE':
                    await self._include()
                else:
                    tokens.append(Token(directive, value, self.line))
            else:
                tokens.append(Token(kind, value, self.line))

        tokens.append(Token('EOF', None, self.line))
        logger.debug("Scanned %d tokens", len(tokens))
        return tokens

    def _skip_whitespace(self) -> int:
        """
        Advance past whitespace at the cursor, counting newlines.
        """
        match_obj = _WHITESPACE.match(self.buffer, self.position)
        self.line += match_obj.group().count('\n')
        self.position = match_obj.end()
        return self.position

    def _capture_raw(self) -> Token:
        """
        Copy the body of a ``js { … }`` block verbatim into one token.

        Braces nest; scanning resumes right after the closing brace.
        """
        start_line = self.line
        start = self._skip_whitespace()
        if start >= len(self.buffer) or self.buffer[start] != '{':
            found = self.buffer[start] if start < len(self.buffer) else 'js'
            raise LexError(found, self.line, detail="expected '{' after js")

        depth = 0
        for index in range(start, len(self.buffer)):
            char = self.buffer[index]
            if char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    raw = self.buffer[start + 1:index]
                    self.line += raw.count('\n')
                    self.position = index + 1
                    return Token('JS', raw, start_line)
        raise LexError('js', start_line, detail="unterminated js block")

    async def _include(self) -> None:
        """
        Fetch an include and splice its text in front of the remaining input.
        """
        directive_line = self.line
        start = self._skip_whitespace()
        literal = _STRING_REGEX.match(self.buffer, start)
        if literal is None:
            found = self.buffer[start] if start < len(self.buffer) else '#include'
            raise LexError(found, self.line, detail="expected quoted path after #include")
        path = literal.group()[1:-1]

        if self.fetch is None:
            raise IncludeError(path, directive_line, detail="no include fetcher configured")
        self.includes += 1
        if self.includes > MAX_INCLUDES:
            raise IncludeError(path, directive_line, detail=f"more than {MAX_INCLUDES} includes")

        try:
            text = await self.fetch(path)
        except IncludeError:
            raise
        except (OSError, ValueError, httpx.HTTPError) as e:
            raise IncludeError(path, directive_line, detail=str(e)) from e

        logger.debug("Included %r (%d characters) at line %d", path, len(text), directive_line)
        self.buffer = text + self.buffer[literal.end():]
        self.position = 0
        self.line = 1


async def tokenize_async(code: str, fetch: Optional[Fetcher] = None) -> list[Token]:
    """
    Convert a string of source code into a list of tokens, awaiting includes.

    Parameters:
        code (str): The source code to tokenize.
        fetch (callable): Awaitable include fetcher.

    Returns:
        list[Token]: A list of Token instances ending with ``EOF``.
    """
    return await Lexer(code, fetch).tokenize()


def tokenize(code: str, fetch: Optional[Fetcher] = None) -> list[Token]:
    """
    Synchronous wrapper around :func:`tokenize_async`.
    """
    return asyncio.run(tokenize_async(code, fetch))
