"""Shared definitions for AST operation identifiers.

This module centralizes the operator constants used by the parser and
interpreter, together with the token kinds that map onto them.  Keeping them
in one place prevents the two components from drifting apart when new
operations are added or existing ones are renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported AST operation names.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    # Assignment
    ASSIGN = "assign"
    ADD_ASSIGN = "add_assign"
    SUB_ASSIGN = "sub_assign"
    MUL_ASSIGN = "mul_assign"
    DIV_ASSIGN = "div_assign"

    # Increment / decrement
    INC = "inc"
    DEC = "dec"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"

    # Boolean
    AND = "and"
    OR = "or"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


ARITHMETIC = {
    'PLUS': Op.ADD,
    'MINUS': Op.SUB,
    'MUL': Op.MUL,
    'DIV': Op.DIV,
}

ASSIGNMENT = {
    'ASSIGN': Op.ASSIGN,
    'PLUS_ASSIGN': Op.ADD_ASSIGN,
    'MINUS_ASSIGN': Op.SUB_ASSIGN,
    'MUL_ASSIGN': Op.MUL_ASSIGN,
    'DIV_ASSIGN': Op.DIV_ASSIGN,
}

# Compound assignments reduce to their arithmetic counterpart.
COMPOUND = {
    Op.ADD_ASSIGN: Op.ADD,
    Op.SUB_ASSIGN: Op.SUB,
    Op.MUL_ASSIGN: Op.MUL,
    Op.DIV_ASSIGN: Op.DIV,
}

STEP = {
    'INC': Op.INC,
    'DEC': Op.DEC,
}

COMPARISON = {
    'EQ': Op.EQ,
    'NE': Op.NE,
    'GT': Op.GT,
    'LT': Op.LT,
    'GE': Op.GE,
    'LE': Op.LE,
}

LOGICAL = {
    'AND': Op.AND,
    'OR': Op.OR,
}


__all__ = ["Op", "ARITHMETIC", "ASSIGNMENT", "COMPOUND", "STEP", "COMPARISON", "LOGICAL"]
