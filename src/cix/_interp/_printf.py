"""The interpreter's built-in ``printf``."""

import re
from collections.abc import Sequence

from cix._errors import EvaluationError

from ._values import Value

PRINTF = "printf"

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
_ESCAPE_RE = re.compile(r"\\(.)")
# Python's % operator has no C length modifiers (h, l, ll, z, ...); drop them.
# A literal "%%" is matched on its own so it is never read as a conversion.
_LENGTH_MODIFIER_RE = re.compile(r"%%|%([-+ #0]*\d*(?:\.\d+)?)(?:hh|h|ll|l|z|j|t|L)([diouxXcs])")


def decode_escapes(text: str) -> str:
    """Decode C escape sequences in string literal text.

    Unknown escapes are left as written.
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def _strip_length_modifier(match: re.Match[str]) -> str:
    if match.group(1) is None:
        return match.group(0)
    return f"%{match.group(1)}{match.group(2)}"


def format_printf(args: Sequence[Value]) -> str:
    """Format evaluated ``printf`` arguments the way C's printf would.

    Args:
        args: The evaluated arguments, format string first. String values
            are expected to be decoded already (see :func:`decode_escapes`).

    Returns:
        The formatted text, without any trailing newline added.

    Raises:
        EvaluationError: If the format string is missing its arguments or
            the arguments do not match the conversions.

    """
    if not args:
        return ""
    fmt, *values = args
    if not isinstance(fmt, str):
        msg = f"printf format must be a string, got {fmt!r}"
        raise EvaluationError(msg)
    spec = _LENGTH_MODIFIER_RE.sub(_strip_length_modifier, fmt)
    try:
        return spec % tuple(values)
    except (TypeError, ValueError) as e:
        msg = f"printf({fmt!r}) failed: {e}"
        raise EvaluationError(msg) from e
