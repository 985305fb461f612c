"""Intermediate Representation (IR) module for cix.

This module provides the immutable data model shared by both backends:

- Expression nodes: Var, Literal, BinaryOp, Call, StructNew, FieldAccess
- Statement nodes: Return, Assign, Call
- Declarations: Variable, Function, StructDef, Module, Program
- Builder functions: new, add_variable, add_function, add_struct, add_module, merge
"""

from ._builder import (
    add_function,
    add_module,
    add_struct,
    add_variable,
    function,
    merge,
    module,
    new,
    struct,
    variable,
)
from ._nodes import (
    Assign,
    BinaryOp,
    BinOp,
    Call,
    Expression,
    FieldAccess,
    Literal,
    Return,
    Statement,
    StructNew,
    Var,
    as_expression,
)
from ._program import Field, Function, Import, Module, Param, Program, StructDef, Variable

__all__ = [
    "Assign",
    "BinOp",
    "BinaryOp",
    "Call",
    "Expression",
    "Field",
    "FieldAccess",
    "Function",
    "Import",
    "Literal",
    "Module",
    "Param",
    "Program",
    "Return",
    "Statement",
    "StructDef",
    "StructNew",
    "Var",
    "Variable",
    "add_function",
    "add_module",
    "add_struct",
    "add_variable",
    "as_expression",
    "function",
    "merge",
    "module",
    "new",
    "struct",
    "variable",
]
