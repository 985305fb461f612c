"""C code emitter for cix programs.

Key functions:
- emit: Convert a Program to C source text without include directives
- render_translation_unit: Emit a complete C file with include directives
"""

from ._c import emit, emit_expression, emit_signature, emit_statement, render_translation_unit
from ._locals import LOCAL_TYPE, infer_locals

__all__ = [
    "LOCAL_TYPE",
    "emit",
    "emit_expression",
    "emit_signature",
    "emit_statement",
    "infer_locals",
    "render_translation_unit",
]
