"""AST node definitions for HolyC.

Each construct is its own dataclass with named fields. Names are already
resolved when a node is built: variable references carry their
:class:`~holyc.symbols.Symbol` and calls carry their
:class:`~holyc.symbols.Prototype`. Every node records the source line it
started on.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from holyc.operations import Op
from holyc.symbols import ClassType, Prototype, Symbol


# ---- Expressions ----

@dataclass
class Number:
    value: Union[int, float]
    line: int


@dataclass
class String:
    value: str
    line: int


@dataclass
class Var:
    symbol: Symbol
    line: int


@dataclass
class Member:
    """A class instance field addressed by its dotted path, e.g. ``pos.x``."""
    symbol: Symbol
    path: str
    type: str
    line: int


@dataclass
class Call:
    """A procedure call. ``None`` arguments keep the parameter default."""
    prototype: Prototype
    args: list[Optional['Expr']]
    line: int


@dataclass
class Negate:
    operand: 'Expr'
    line: int


@dataclass
class Chain:
    """Operands combined strictly left to right, without precedence."""
    first: 'Expr'
    rest: list[tuple[Op, 'Expr']]
    line: int


@dataclass
class Comparison:
    """A chain optionally compared against further chains; ``!`` negates it."""
    negated: bool
    first: Chain
    rest: list[tuple[Op, Chain]]
    line: int


@dataclass
class Condition:
    """A flat list of comparisons joined by ``&&`` and ``||``."""
    terms: list[Comparison]
    joins: list[Op]
    line: int


Expr = Union[Number, String, Var, Member, Call, Negate, Chain]
Target = Union[Var, Member]


# ---- Statements ----

@dataclass
class Declaration:
    """``TYPE a, b = expr;`` with one ``(symbol, initializer)`` per name."""
    type: str
    targets: list[tuple[Symbol, Optional[Chain]]]
    line: int


@dataclass
class Assign:
    target: Target
    op: Op
    value: Chain
    line: int


@dataclass
class IncDec:
    target: Target
    op: Op
    line: int


@dataclass
class ProcDef:
    prototype: Prototype
    line: int


@dataclass
class CallStmt:
    call: Call
    line: int


@dataclass
class Print:
    """A format string and the arguments substituted into it."""
    format: str
    args: list['Expr']
    line: int


@dataclass
class For:
    init: 'Stmt'
    cond: Condition
    step: 'Stmt'
    body: list['Stmt']
    line: int


@dataclass
class If:
    cond: Condition
    then: list['Stmt']
    orelse: list['Stmt'] = field(default_factory=list)
    line: int = 0


@dataclass
class Return:
    value: Optional[Chain]
    prototype: Prototype
    line: int


@dataclass
class ClassDef:
    class_type: ClassType
    instance: Optional[Declaration]
    line: int


@dataclass
class Define:
    symbol: Symbol
    value: Union[Number, String]
    line: int


@dataclass
class Js:
    """Raw foreign code handed to the host unchanged."""
    code: str
    line: int


Stmt = Union[
    Declaration, Assign, IncDec, ProcDef, CallStmt, Print,
    For, If, Return, ClassDef, Define, Js,
]
