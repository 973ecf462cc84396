"""Errors.

Every failure raised by the pipeline derives from :class:`HolyCError` and
renders the same structured message, naming the stage that failed, the
offending text and the source line:

    Lexer failure: '@' unexpected token in line 3


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class HolyCError(Exception):
    """
    Base error for all pipeline stages.
    """
    stage = "Interpreter"
    reason = "unexpected token"

    def __init__(self, text, line=None, detail=None, reason=None):
        self.text = text
        self.line = line
        self.detail = detail
        if reason is not None:
            self.reason = reason
        message = f"{self.stage} failure: '{text}' {self.reason}"
        if line is not None:
            message += f" in line {line}"
        super().__init__(message)


class LexError(HolyCError):
    """
    Error for unrecognized characters and unterminated literals.
    """
    stage = "Lexer"


class IncludeError(HolyCError):
    """
    I/O error for include directives whose text could not be fetched.
    """
    stage = "Include"
    reason = "could not be fetched"


class ParseError(HolyCError):
    """
    Error for structural mismatches, unresolved or redeclared names and
    arity mismatches.
    """
    stage = "Parser"

    def __init__(self, token, detail=None):
        self.token = token
        text = token.text if token.text is not None else token.kind
        super().__init__(text, token.line, detail)


class RuntimeFailure(HolyCError):
    """
    Error for operations that cannot be carried out at run time, such as a
    division by zero.
    """
    stage = "Runtime"


class InternalError(HolyCError):
    """
    Error for evaluator lookups that the parser should have made impossible.
    """
    stage = "Internal"
    reason = "unresolved at run time"
