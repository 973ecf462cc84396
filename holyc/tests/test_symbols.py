"""
Tests for symbol tables and type coercion
"""
import pytest

from holyc.exceptions import RuntimeFailure
from holyc.symbols import SymbolTables, coerce


def test_coerce_integer_widths():
    assert coerce('U8', 256) == 0
    assert coerce('I16', 32768) == -32768
    assert coerce('U32', -1) == 4294967295
    assert coerce('I64', 2.9) == 2


def test_coerce_other_types():
    assert coerce('F64', 3) == 3.0
    assert isinstance(coerce('F64', 3), float)
    assert coerce('Bool', -4) == 1
    assert coerce('U0', "text") == "text"
    assert coerce('I32', "text") == "text"


def test_resolution_order():
    tables = SymbolTables()
    global_x = tables.globals.declare('x', 'I32', 1)
    prototype = tables.new_prototype('F', 'I32', 2)
    arg_x = prototype.add_param('x', 'F64', 2).symbol
    local_y = tables.scope_for(prototype).declare('y', 'I32', 3)

    assert tables.resolve('x', None) is global_x
    assert tables.resolve('x', prototype) is arg_x
    assert tables.resolve('y', prototype) is local_y
    assert tables.resolve('y', None) is None


def test_slots_are_distinct_per_table():
    tables = SymbolTables()
    first = tables.new_prototype('A', 'U0', 1)
    second = tables.new_prototype('B', 'U0', 2)
    a_local = tables.scope_for(first).declare('n', 'I32', 1)
    b_local = tables.scope_for(second).declare('n', 'I32', 2)
    global_n = tables.globals.declare('n', 'I32', 3)
    assert len({a_local.slot, b_local.slot, global_n.slot}) == 3
    assert first.ordinal == 0 and second.ordinal == 1


def test_prototypes_are_callable_only_once_published():
    tables = SymbolTables()
    prototype = tables.new_prototype('A', 'U0', 1)
    assert 'A' not in tables.prototypes
    assert not tables.is_declared('A', None)
    tables.publish(prototype)
    assert tables.prototypes['A'] is prototype
    assert tables.is_declared('A', None)


def test_locals_may_shadow_globals():
    tables = SymbolTables()
    tables.globals.declare('x', 'I32', 1)
    prototype = tables.new_prototype('F', 'U0', 2)
    assert tables.is_declared('x', None)
    assert not tables.is_declared('x', prototype)
    assert tables.is_declared('F', prototype)


def test_coerce_rejects_non_finite_integers():
    with pytest.raises(RuntimeFailure) as exc_info:
        coerce('I32', float('inf'), 7)
    assert str(exc_info.value) == "Runtime failure: 'inf' cannot be converted in line 7"
    with pytest.raises(RuntimeFailure):
        coerce('U8', float('nan'))
