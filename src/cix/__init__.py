"""Small C-flavoured IR with a C emitter, an interpreter and a module linker."""

__all__ = [
    "Assign",
    "BinOp",
    "BinaryOp",
    "Call",
    "CixError",
    "EvaluationError",
    "Expression",
    "Field",
    "FieldAccess",
    "Function",
    "FunctionNotFoundError",
    "Import",
    "ImportCycleError",
    "ImportDiagnostic",
    "ImportGraph",
    "ImportValidationError",
    "Literal",
    "MissingImportTarget",
    "Module",
    "Param",
    "Program",
    "Return",
    "Statement",
    "StructDef",
    "StructNew",
    "StructValue",
    "UndefinedExport",
    "UnexportedImport",
    "Value",
    "Var",
    "Variable",
    "add_function",
    "add_module",
    "add_struct",
    "add_variable",
    "check_exports",
    "check_imports",
    "create_program",
    "emit",
    "execute",
    "function",
    "geometry_library",
    "io_library",
    "math_library",
    "merge",
    "module",
    "new",
    "render_translation_unit",
    "struct",
    "validate",
    "variable",
]

from ._emit import emit, render_translation_unit
from ._errors import (
    CixError,
    EvaluationError,
    FunctionNotFoundError,
    ImportCycleError,
    ImportValidationError,
)
from ._interp import StructValue, Value, execute
from ._ir import (
    Assign,
    BinaryOp,
    BinOp,
    Call,
    Expression,
    Field,
    FieldAccess,
    Function,
    Import,
    Literal,
    Module,
    Param,
    Program,
    Return,
    Statement,
    StructDef,
    StructNew,
    Var,
    Variable,
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
from ._library import create_program, geometry_library, io_library, math_library
from ._link import (
    ImportDiagnostic,
    ImportGraph,
    MissingImportTarget,
    UndefinedExport,
    UnexportedImport,
    check_exports,
    check_imports,
    validate,
)
