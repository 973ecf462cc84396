"""HolyC interpreter.

Lexer, parser and tree-walk interpreter for a small HolyC subset. The
one-shot entry point is :func:`run`; use :class:`Interpreter` directly for
idle (state-preserving) runs and host hooks.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from holyc.exceptions import (
    HolyCError,
    IncludeError,
    InternalError,
    LexError,
    ParseError,
    RuntimeFailure,
)
from holyc.fetchers import FileFetcher
from holyc.interpreter import Interpreter, run
from holyc.lexer import Token, tokenize, tokenize_async
from holyc.parser import Parser

__version__ = "0.1.0"

__all__ = [
    "FileFetcher",
    "HolyCError",
    "IncludeError",
    "InternalError",
    "Interpreter",
    "LexError",
    "ParseError",
    "Parser",
    "RuntimeFailure",
    "Token",
    "run",
    "tokenize",
    "tokenize_async",
]
