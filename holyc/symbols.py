"""Symbol tables.

Declarations made while parsing: the global table, one scoped table per
procedure (indexed by the procedure's ordinal), procedure prototypes with
their argument lists, and class types. Every declared name receives a
:class:`Slot`, the address of its cell in the interpreter's value store, so
the tables themselves never hold runtime values.


File: symbols.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from holyc.exceptions import RuntimeFailure

logger = logging.getLogger(__name__)

# Bit width and signedness of the integer type keywords.
INTEGER_TYPES = {
    'I8': (8, True),
    'U8': (8, False),
    'I16': (16, True),
    'U16': (16, False),
    'I32': (32, True),
    'U32': (32, False),
    'I64': (64, True),
    'U64': (64, False),
}


def coerce(type_name: str, value: Any, line: Optional[int] = None) -> Any:
    """
    Convert a value to the representation of a declared type.

    Integer types wrap to their width (two's complement when signed), ``F64``
    stores floats and ``Bool`` stores 0 or 1. Strings and the void types pass
    through untouched.

    Raises:
        RuntimeFailure: If an infinite or NaN float is stored in an integer
            type, or an integer too large for a float is stored in ``F64``.
    """
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, (int, float)):
        return value
    if type_name == 'F64':
        try:
            return float(value)
        except OverflowError as e:
            raise RuntimeFailure(value, line, reason="cannot be converted") from e
    if type_name == 'Bool':
        return int(bool(value))
    width = INTEGER_TYPES.get(type_name)
    if width is None:
        return value
    bits, signed = width
    try:
        value = int(value) & ((1 << bits) - 1)
    except (OverflowError, ValueError) as e:
        raise RuntimeFailure(value, line, reason="cannot be converted") from e
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


@dataclass(frozen=True)
class Slot:
    """Address of a value cell: table kind, procedure ordinal and index."""
    scope: str
    ordinal: Optional[int]
    index: int


@dataclass
class Symbol:
    """A declared variable, argument or constant."""
    name: str
    type: str
    line: int
    slot: Slot
    class_type: Optional['ClassType'] = None
    constant: bool = False


@dataclass
class Field:
    """A class field declaration."""
    name: str
    type: str
    class_type: Optional['ClassType'] = None


@dataclass
class ClassType:
    """A class type definition."""
    name: str
    line: int
    fields: list[Field] = field(default_factory=list)

    def get_field(self, name: str) -> Optional[Field]:
        """
        Return the field called ``name``, if any.
        """
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None


class Scope:
    """
    An ordered table of symbols sharing one slot namespace.
    """

    def __init__(self, kind: str, ordinal: Optional[int] = None):
        self.kind = kind
        self.ordinal = ordinal
        self.symbols: dict[str, Symbol] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

    def lookup(self, name: str) -> Optional[Symbol]:
        """
        Return the symbol called ``name`` in this table, if any.
        """
        return self.symbols.get(name)

    def declare(self, name: str, type_name: str, line: int,
                class_type: Optional[ClassType] = None, constant: bool = False) -> Symbol:
        """
        Append a symbol and assign it the next slot of this table.
        """
        slot = Slot(self.kind, self.ordinal, len(self.symbols))
        symbol = Symbol(name, type_name, line, slot, class_type, constant)
        self.symbols[name] = symbol
        return symbol


@dataclass
class Param:
    """A procedure parameter and its optional default value."""
    symbol: Symbol
    default: Any = None
    has_default: bool = False


@dataclass
class Prototype:
    """A procedure signature, its ordinal and its parsed body."""
    name: str
    return_type: str
    ordinal: int
    line: int
    args: Scope
    params: list[Param] = field(default_factory=list)
    body: list = field(default_factory=list)

    def add_param(self, name: str, type_name: str, line: int,
                  class_type: Optional[ClassType] = None) -> Param:
        """
        Declare a parameter in the argument table.
        """
        param = Param(self.args.declare(name, type_name, line, class_type))
        self.params.append(param)
        return param


class SymbolTables:
    """
    Every table the parser declares into and the interpreter reads from.
    """

    def __init__(self):
        self.globals = Scope('global')
        self.scopes: dict[int, Scope] = {}
        self.prototypes: dict[str, Prototype] = {}
        self.classes: dict[str, ClassType] = {}
        self.next_ordinal = 0

    def new_prototype(self, name: str, return_type: str, line: int) -> Prototype:
        """
        Create an unpublished prototype with a fresh ordinal and scoped table.
        """
        ordinal = self.next_ordinal
        self.next_ordinal += 1
        self.scopes[ordinal] = Scope('local', ordinal)
        return Prototype(name, return_type, ordinal, line, Scope('arg', ordinal))

    def publish(self, prototype: Prototype) -> None:
        """
        Make a fully parsed procedure callable.
        """
        self.prototypes[prototype.name] = prototype
        logger.debug(
            "Registered procedure %s #%d with %d parameter(s)",
            prototype.name, prototype.ordinal, len(prototype.params),
        )

    def scope_for(self, prototype: Optional[Prototype]) -> Scope:
        """
        Return the table new declarations go to.
        """
        if prototype is None:
            return self.globals
        return self.scopes[prototype.ordinal]

    def resolve(self, name: str, prototype: Optional[Prototype]) -> Optional[Symbol]:
        """
        Look a name up in the arguments, the scoped locals and the globals,
        in that order.
        """
        if prototype is not None:
            symbol = prototype.args.lookup(name) or self.scopes[prototype.ordinal].lookup(name)
            if symbol is not None:
                return symbol
        return self.globals.lookup(name)

    def is_declared(self, name: str, prototype: Optional[Prototype]) -> bool:
        """
        Whether declaring ``name`` in the current scope would clash.

        Procedure and class names are global. Inside a procedure, arguments
        and locals share one namespace and may shadow globals.
        """
        if name in self.prototypes or name in self.classes:
            return True
        if prototype is None:
            return name in self.globals
        return (
            prototype.name == name
            or name in prototype.args
            or name in self.scopes[prototype.ordinal]
        )
