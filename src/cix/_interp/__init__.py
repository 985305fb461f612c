"""Interpreter module for cix.

Evaluates IR programs directly, without going through C.

Key types:
- execute: Run a function of a Program and return its value
- Interpreter: The evaluator behind execute, one per execution
- Environment: Global values plus a stack of per-call frames
- StructValue: Runtime value of a StructNew expression
"""

from ._engine import CONTINUE, Continue, Interpreter, Returned, apply_binary_op, execute
from ._frames import Environment
from ._printf import decode_escapes, format_printf
from ._values import StructValue, Value

__all__ = [
    "CONTINUE",
    "Continue",
    "Environment",
    "Interpreter",
    "Returned",
    "StructValue",
    "Value",
    "apply_binary_op",
    "decode_escapes",
    "execute",
    "format_printf",
]
