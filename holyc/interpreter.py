"""Interpreter.

This is a tree-walk interpreter for the AST produced by the parser. It
supports declarations with fixed-width types, assignments, procedure calls
with default arguments, conditionals, loops, class instances, output strings
and foreign-code blocks.

1. Execution Model
Statements are executed via `execute()` and expressions are evaluated by
`eval_expr()`. Both dispatch on the node dataclass. `execute()` returns a
:class:`Flow` rather than raising, so a ``return`` deep inside loops and
branches unwinds by plain return values up to the call boundary.

2. Environment
Names were resolved to slots while parsing. The interpreter keeps the values
in a :class:`Store` keyed by slot, apart from the symbol tables, so the parser
never touches runtime values and idle mode can roll declarations back without
losing state.

3. Expression Evaluation
Arithmetic chains are evaluated strictly left to right without precedence.
Logical conditions bind ``&&`` tighter than ``||`` and short circuit. Values
are coerced to their declared type when stored.

4. Pipeline
`run()` lexes, parses and executes one source text with fresh tables and
returns the text it printed. `run_idle()` keeps the tables between calls for
incremental use and rolls them back when a parse fails.

5. Error Handling
Every failure is a :class:`~holyc.exceptions.HolyCError`. Before it propagates
to the caller, its message is passed to the ``on_error`` hook if one is set.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import asyncio
import copy
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from holyc.exceptions import HolyCError, InternalError, RuntimeFailure
from holyc.lexer import Fetcher, tokenize_async
from holyc.nodes import (
    Assign,
    Call,
    CallStmt,
    Chain,
    ClassDef,
    Comparison,
    Condition,
    Declaration,
    Define,
    For,
    If,
    IncDec,
    Js,
    Member,
    Negate,
    Number,
    Print,
    ProcDef,
    Return,
    String,
    Var,
)
from holyc.operations import COMPOUND, Op
from holyc.parser import Parser
from holyc.symbols import Slot, SymbolTables, coerce

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r'%[disfx%]')
_ESCAPES = {'n': '\n', 't': '\t', '\\': '\\', '"': '"', "'": "'"}
_ESCAPE = re.compile(r'\\(.)')


@dataclass(frozen=True)
class Flow:
    """Outcome of executing statements: normal completion or a return."""
    returning: bool = False
    value: Any = None


NORMAL = Flow()


class Store:
    """
    Runtime values keyed by slot. Cells that were never written read as 0.
    """

    def __init__(self):
        self.cells: dict[Slot, Any] = {}

    def load(self, slot: Slot) -> Any:
        """
        Return the value held in ``slot``.
        """
        return self.cells.get(slot, 0)

    def save(self, slot: Slot, value: Any) -> None:
        """
        Store ``value`` in ``slot``.
        """
        self.cells[slot] = value


def decode_escapes(text: str) -> str:
    """
    Decode ``\\n``, ``\\t``, ``\\\\`` and quote escapes; unknown escapes are kept as written.

    A string literal ends at the first matching quote, so ``\\"`` can only
    appear inside a single-quoted literal and ``\\'`` inside a double-quoted one.
    """
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group()), text)


def _truncating_div(left: int, right: int) -> int:
    """
    Integer division rounding toward zero.
    """
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


class Interpreter:
    """Tree-walk interpreter for HolyC."""

    def __init__(self, file: str = "<input>", fetch: Optional[Fetcher] = None,
                 js_executor: Optional[Callable[[str], Optional[str]]] = None,
                 on_error: Optional[Callable[[str], None]] = None,
                 on_output: Optional[Callable[[str], None]] = None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): The script name used in log records.
            fetch (callable): Awaitable include fetcher.
            js_executor (callable): Receives the raw text of each ``js`` block;
                a returned string is written to the output.
            on_error (callable): Receives the message of a failed run.
            on_output (callable): Receives each piece of output as it is written.
        """
        self.file = file
        self.fetch = fetch
        self.js_executor = js_executor
        self.on_error = on_error
        self.on_output = on_output
        self.tables = SymbolTables()
        self.store = Store()
        self.output: list[str] = []
        # Tokens and statements of the most recent run, for debugging.
        self.tokens: list = []
        self.ast: list = []

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def run(self, source: str) -> str:
        """
        Run a source text with fresh tables and return its output.
        """
        return asyncio.run(self.run_async(source))

    def run_idle(self, source: str) -> str:
        """
        Run a source text against the tables left by earlier idle runs.
        """
        return asyncio.run(self.run_idle_async(source))

    async def run_async(self, source: str) -> str:
        """
        Awaitable form of :meth:`run`.
        """
        self.tables = SymbolTables()
        self.store = Store()
        return await self._run(source, idle=False)

    async def run_idle_async(self, source: str) -> str:
        """
        Awaitable form of :meth:`run_idle`.
        """
        return await self._run(source, idle=True)

    async def _run(self, source: str, idle: bool) -> str:
        self.output = []
        snapshot = copy.deepcopy(self.tables) if idle else None
        try:
            try:
                self.tokens = await tokenize_async(source, self.fetch)
                self.ast = Parser(self.tokens, self.tables, self.file).parse()
            except HolyCError:
                if snapshot is not None:
                    self.tables = snapshot
                raise
            logger.debug("Executing %d statement(s) from %s", len(self.ast), self.file)
            self.execute(self.ast)
        except HolyCError as e:
            logger.debug("Run of %s failed: %s", self.file, e)
            if self.on_error is not None:
                self.on_error(str(e))
            raise
        return ''.join(self.output)

    def emit(self, text: str) -> None:
        """
        Append text to the output of the current run.
        """
        self.output.append(text)
        if self.on_output is not None:
            self.on_output(text)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, node):
        """
        Recursively evaluate an expression node and return its value.

        Raises:
            RuntimeFailure: On division by zero or unsupported operand types.
            InternalError: If the node references a procedure that is not
                published or is of an unknown kind.
        """
        if isinstance(node, (Number, String)):
            return node.value
        elif isinstance(node, Var):
            return self.store.load(node.symbol.slot)
        elif isinstance(node, Member):
            fields = self.store.load(node.symbol.slot)
            if not isinstance(fields, dict):
                return coerce(node.type, 0)
            return fields.get(node.path, coerce(node.type, 0))
        elif isinstance(node, Chain):
            value = self.eval_expr(node.first)
            for op, operand in node.rest:
                value = self._arith(op, value, self.eval_expr(operand), node.line)
            return value
        elif isinstance(node, Negate):
            value = self.eval_expr(node.operand)
            if isinstance(value, str):
                raise RuntimeFailure(value, node.line, reason="cannot be negated")
            return -value
        elif isinstance(node, Call):
            return self._call(node)
        raise InternalError(type(node).__name__, getattr(node, 'line', None))

    def _arith(self, op: Op, left, right, line: int):
        """
        Apply one arithmetic step of a chain.
        """
        if isinstance(left, str) or isinstance(right, str):
            if op == Op.ADD:
                return _format_value(left) + _format_value(right)
            raise RuntimeFailure(f"{left} {op} {right}", line, reason="unsupported operand types")

        try:
            if op == Op.ADD:
                return left + right
            elif op == Op.SUB:
                return left - right
            elif op == Op.MUL:
                return left * right
            elif op == Op.DIV:
                if right == 0:
                    raise RuntimeFailure(f"{left} / {right}", line, reason="division by zero")
                if isinstance(left, int) and isinstance(right, int):
                    return _truncating_div(left, right)
                return left / right
        except OverflowError as e:
            raise RuntimeFailure(f"{left} {op} {right}", line, reason="overflows") from e
        raise InternalError(str(op), line)

    def _compare(self, op: Op, left, right, line: int) -> bool:
        try:
            if op == Op.EQ:
                return left == right
            elif op == Op.NE:
                return left != right
            elif op == Op.GT:
                return left > right
            elif op == Op.LT:
                return left < right
            elif op == Op.GE:
                return left >= right
            elif op == Op.LE:
                return left <= right
        except TypeError as e:
            raise RuntimeFailure(f"{left} {op} {right}", line, reason="cannot be compared") from e
        raise InternalError(str(op), line)

    def eval_comparison(self, node: Comparison) -> bool:
        """
        Evaluate a comparison. Every adjacent pair must hold; a lone chain is
        true when it is non-zero.
        """
        left = self.eval_expr(node.first)
        if not node.rest:
            result = bool(left)
        else:
            result = True
            for op, chain in node.rest:
                right = self.eval_expr(chain)
                if not self._compare(op, left, right, node.line):
                    result = False
                    break
                left = right
        return not result if node.negated else result

    def eval_condition(self, node: Condition) -> bool:
        """
        Evaluate a flat logical chain with ``&&`` binding tighter than ``||``.
        """
        groups = [[node.terms[0]]]
        for join, term in zip(node.joins, node.terms[1:]):
            if join == Op.OR:
                groups.append([term])
            else:
                groups[-1].append(term)
        return any(all(self.eval_comparison(term) for term in group) for group in groups)

    def _call(self, node: Call):
        """
        Evaluate the arguments in the caller, bind them and run the body.
        """
        prototype = node.prototype
        if self.tables.prototypes.get(prototype.name) is not prototype:
            raise InternalError(prototype.name, node.line)

        values = [None if arg is None else self.eval_expr(arg) for arg in node.args]
        for index, param in enumerate(prototype.params):
            value = values[index] if index < len(values) else None
            if value is None:
                value = param.default
            self.store.save(param.symbol.slot, coerce(param.symbol.type, value, node.line))

        logger.debug("Calling %s with %d argument(s)", prototype.name, len(values))
        flow = self.execute(prototype.body)
        value = flow.value if flow.returning and flow.value is not None else 0
        return coerce(prototype.return_type, value, node.line)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _assign(self, target, value) -> None:
        if isinstance(target, Member):
            fields = self.store.load(target.symbol.slot)
            if not isinstance(fields, dict):
                fields = {}
                self.store.save(target.symbol.slot, fields)
            fields[target.path] = coerce(target.type, value, target.line)
        else:
            self.store.save(target.symbol.slot, coerce(target.symbol.type, value, target.line))

    def _assign_chain(self, target, op: Op, chain: Chain) -> None:
        """
        Fold an assignment operator and its chain into the target, step by step.

        The assignment operator is the first step and every arithmetic operator
        of the chain follows it, left to right. The running value is written
        to the target after each step, so an operand naming the target reads
        the value written by the step before it.
        """
        steps = [(COMPOUND.get(op), chain.first), *chain.rest]
        for step_op, operand in steps:
            right = self.eval_expr(operand)
            if step_op is None:
                value = right
            else:
                value = self._arith(step_op, self.eval_expr(target), right, chain.line)
            self._assign(target, value)

    def execute(self, statements: list) -> Flow:
        """
        Execute a list of statements.

        Returns:
            Flow: ``NORMAL``, or the returning flow of a ``return`` statement
            reached inside the list.
        """
        for stmt in statements:
            if isinstance(stmt, Declaration):
                for symbol, initializer in stmt.targets:
                    if symbol.class_type is not None:
                        self.store.save(symbol.slot, None)
                        continue
                    self.store.save(symbol.slot, coerce(symbol.type, 0))
                    if initializer is not None:
                        self._assign_chain(Var(symbol, stmt.line), Op.ASSIGN, initializer)

            elif isinstance(stmt, Assign):
                self._assign_chain(stmt.target, stmt.op, stmt.value)

            elif isinstance(stmt, IncDec):
                delta = 1 if stmt.op == Op.INC else -1
                self._assign(stmt.target, self._arith(Op.ADD, self.eval_expr(stmt.target), delta, stmt.line))

            elif isinstance(stmt, CallStmt):
                self._call(stmt.call)

            elif isinstance(stmt, Print):
                args = [self.eval_expr(arg) for arg in stmt.args]
                self.emit(self.format_output(stmt.format, args, stmt.line))

            elif isinstance(stmt, For):
                self.execute([stmt.init])
                while self.eval_condition(stmt.cond):
                    flow = self.execute(stmt.body)
                    if flow.returning:
                        return flow
                    self.execute([stmt.step])

            elif isinstance(stmt, If):
                block = stmt.then if self.eval_condition(stmt.cond) else stmt.orelse
                flow = self.execute(block)
                if flow.returning:
                    return flow

            elif isinstance(stmt, Return):
                value = None if stmt.value is None else self.eval_expr(stmt.value)
                return Flow(True, value)

            elif isinstance(stmt, ClassDef):
                if stmt.instance is not None:
                    self.execute([stmt.instance])

            elif isinstance(stmt, Define):
                self.store.save(stmt.symbol.slot, coerce(stmt.symbol.type, stmt.value.value, stmt.line))

            elif isinstance(stmt, Js):
                self._run_js(stmt)

            elif isinstance(stmt, ProcDef):
                # Published while parsing; nothing happens until it is called.
                continue

            else:
                raise InternalError(type(stmt).__name__, getattr(stmt, 'line', None))
        return NORMAL

    def _run_js(self, stmt: Js) -> None:
        if self.js_executor is None:
            logger.warning("Skipping js block on line %d: no js executor configured", stmt.line)
            return
        result = self.js_executor(stmt.code)
        if isinstance(result, str) and result:
            self.emit(result)

    def format_output(self, fmt: str, args: list, line: Optional[int] = None) -> str:
        """
        Substitute ordered arguments into a format string and decode escapes.

        ``%d`` and ``%i`` print integers, ``%f`` six-digit floats, ``%x``
        lowercase hex and ``%s`` any value; ``%%`` is a literal percent sign.
        Placeholders without an argument are kept as written and arguments
        without a placeholder are appended.
        """
        remaining = list(args)

        def substitute(match_obj):
            spec = match_obj.group()
            if spec == '%%':
                return '%'
            if not remaining:
                return spec
            value = remaining.pop(0)
            if not isinstance(value, (int, float)) or spec == '%s':
                return _format_value(value)
            try:
                if spec in ('%d', '%i'):
                    return str(int(value))
                if spec == '%f':
                    return f"{value:f}"
                return format(int(value), 'x')
            except (OverflowError, ValueError) as e:
                raise RuntimeFailure(value, line, reason="cannot be converted") from e

        text = _PLACEHOLDER.sub(substitute, fmt)
        text += ''.join(_format_value(value) for value in remaining)
        return decode_escapes(text)


def run(source: str, **hooks) -> str:
    """
    Run a source text once with fresh tables and return its output.

    Keyword arguments are passed to :class:`Interpreter` (``file``, ``fetch``,
    ``js_executor``, ``on_error``, ``on_output``).
    """
    return Interpreter(**hooks).run(source)
