"""Tree-walking interpreter for cix programs."""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TextIO, TypeAlias, assert_never

from cix._errors import EvaluationError, FunctionNotFoundError
from cix._ir import (
    Assign,
    BinaryOp,
    BinOp,
    Call,
    Expression,
    FieldAccess,
    Function,
    Literal,
    Program,
    Return,
    Statement,
    StructNew,
    Var,
)

from ._frames import Environment
from ._printf import PRINTF, decode_escapes, format_printf
from ._values import StructValue, Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Continue:
    """Statement finished normally; execution moves to the next statement."""


@dataclass(frozen=True, slots=True)
class Returned:
    """A ``Return`` statement ran; the enclosing call ends with ``value``."""

    value: Value


CONTINUE = Continue()

Flow: TypeAlias = Continue | Returned


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero, like C."""
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def apply_binary_op(op: BinOp, left: Value, right: Value) -> int:
    """Apply an arithmetic operator to two integer operands.

    Raises:
        EvaluationError: If an operand is not an integer, or on division by zero.

    """
    if not isinstance(left, int) or not isinstance(right, int):
        msg = f"Operator '{op}' needs integer operands, got {left!r} and {right!r}"
        raise EvaluationError(msg)

    match op:
        case BinOp.ADD:
            return left + right
        case BinOp.SUB:
            return left - right
        case BinOp.MUL:
            return left * right
        case BinOp.DIV:
            if right == 0:
                msg = f"Division by zero: {left} / 0"
                raise EvaluationError(msg)
            return _truncating_div(left, right)
        case _:
            assert_never(op)


class Interpreter:
    """Evaluates the functions of one Program.

    Each instance owns a single Environment, so an Interpreter must not be
    shared between concurrent executions. ``execute`` creates a fresh one
    per call.

    Attributes:
        program: The program being run. It is never modified.
        env: Global values and the call-frame stack.
        stdout: Stream receiving ``printf`` output.
        strict: If True, a call to an unknown function raises
            FunctionNotFoundError instead of evaluating to 0.

    """

    def __init__(self, program: Program, *, stdout: TextIO | None = None, strict: bool = False) -> None:
        self.program = program
        self.env = Environment()
        self.stdout = stdout if stdout is not None else sys.stdout
        self.strict = strict

    def initialize_globals(self) -> None:
        """Evaluate global then module variable initializers, in declaration order."""
        for var in self.program.iter_variables():
            value = self.evaluate(var.value)
            logger.debug("Initialized global %s = %r", var.name, value)
            self.env.define_global(var.name, value)

    def resolve(self, name: str) -> Function:
        func = self.program.find_function(name)
        if func is None:
            raise FunctionNotFoundError(name)
        return func

    def call(self, func: Function, args: Sequence[Value]) -> Value:
        """Run a function in a new frame and return its result.

        Parameters without a matching argument are bound to 0; extra
        arguments are ignored.
        """
        bindings = {name: args[i] if i < len(args) else 0 for i, name in enumerate(func.param_names)}
        logger.debug("Calling %s(%s) at depth %d", func.name, bindings, self.env.depth)
        with self.env.call_frame(bindings):
            for stmt in func.body:
                flow = self.execute_statement(stmt)
                if isinstance(flow, Returned):
                    logger.debug("%s returned %r", func.name, flow.value)
                    return flow.value
        return None

    def _printf(self, args: Sequence[Expression]) -> int:
        text = format_printf([self.evaluate(arg) for arg in args])
        self.stdout.write(text)
        return len(text)

    def execute_statement(self, stmt: Statement) -> Flow:
        match stmt:
            case Return(value):
                return Returned(self.evaluate(value))
            case Assign(name, value):
                self.env.assign(name, self.evaluate(value))
                return CONTINUE
            case Call(name, args):
                self._evaluate_call(name, args)
                return CONTINUE
            case _:
                assert_never(stmt)

    def _evaluate_call(self, name: str, args: Sequence[Expression]) -> Value:
        if name == PRINTF:
            return self._printf(args)
        func = self.program.find_function(name)
        if func is None:
            if self.strict:
                raise FunctionNotFoundError(name)
            logger.warning("Call to unknown function '%s' evaluated to 0", name)
            return 0
        return self.call(func, [self.evaluate(arg) for arg in args])

    def evaluate(self, expr: Expression) -> Value:
        match expr:
            case Var(name):
                return self.env.lookup(name)
            case Literal(value):
                # String literals hold C source text; the runtime value is the decoded string.
                return decode_escapes(value) if isinstance(value, str) else value
            case BinaryOp(op, left, right):
                return apply_binary_op(op, self.evaluate(left), self.evaluate(right))
            case Call(name, args):
                return self._evaluate_call(name, args)
            case StructNew(struct_name, fields):
                values = {field_name: self.evaluate(value) for field_name, value in fields}
                return StructValue(struct_name=struct_name, fields=MappingProxyType(values))
            case FieldAccess(target, field):
                base = self.evaluate(target)
                if isinstance(base, StructValue):
                    return base.get(field)
                return 0
            case _:
                assert_never(expr)


def execute(
    program: Program,
    entry: str = "main",
    args: Sequence[Value] = (),
    *,
    stdout: TextIO | None = None,
    strict: bool = False,
) -> Value:
    """Execute a function of a program and return its result.

    ``entry`` is resolved (global functions before module functions), the
    global and module variables are initialized, and ``entry`` is called
    with ``args``. Every call gets a fresh Environment, so executions never
    observe each other's variables.

    Args:
        program: The program to run. It is not modified.
        entry: Name of the function to call.
        args: Argument values for the entry function's parameters.
        stdout: Stream for ``printf`` output. Defaults to ``sys.stdout``.
        strict: Raise FunctionNotFoundError for calls to unknown functions
            instead of evaluating them to 0.

    Returns:
        The value of the entry function's ``Return``, or None if it
        finishes without returning.

    Raises:
        FunctionNotFoundError: If ``entry`` (or, in strict mode, any called
            function) cannot be resolved.
        EvaluationError: On a runtime arithmetic or printf error.

    Example:
        >>> program = add_function(new(), "main", "int", body=[Return(Literal(42))])
        >>> execute(program)
        42

    """
    interpreter = Interpreter(program, stdout=stdout, strict=strict)
    func = interpreter.resolve(entry)
    interpreter.initialize_globals()
    logger.debug("Executing %s with args %r", entry, list(args))
    return interpreter.call(func, args)
