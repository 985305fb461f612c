"""Statement and expression nodes of the IR.

Each node kind is its own frozen dataclass. `Expression` and `Statement` are
closed unions over those classes, so consumers dispatch with `match` and
`typing.assert_never` catches a missing case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto


class BinOp(StrEnum):
    """Arithmetic operator of a BinaryOp node."""

    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()  # Integer division, truncating toward zero


@dataclass(frozen=True, slots=True)
class Var:
    """Reference to a variable or parameter by name."""

    name: str


@dataclass(frozen=True, slots=True)
class Literal:
    """Integer or string constant.

    String literals hold C source text: escapes such as ``\\n`` are kept as
    written, emitted verbatim, and decoded by the interpreter on evaluation.
    """

    value: int | str


@dataclass(frozen=True, slots=True)
class BinaryOp:
    op: BinOp
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Call:
    """Function call.

    Valid both as an expression and as a statement. In statement position
    the result is discarded.
    """

    name: str
    args: tuple[Expression, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class StructNew:
    """Construct a struct value from ordered ``(field_name, expression)`` pairs."""

    struct_name: str
    fields: tuple[tuple[str, Expression], ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class FieldAccess:
    target: Expression
    field: str


@dataclass(frozen=True, slots=True)
class Return:
    value: Expression


@dataclass(frozen=True, slots=True)
class Assign:
    name: str
    value: Expression


Expression = Var | Literal | BinaryOp | Call | StructNew | FieldAccess
Statement = Return | Assign | Call


def as_expression(value: Expression | int | str) -> Expression:
    """Wrap a bare int or str in a Literal, pass expressions through."""
    if isinstance(value, (int, str)):
        return Literal(value)
    return value
