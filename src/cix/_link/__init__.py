"""Module linker for cix.

Checks that module imports resolve against the exports of other modules,
and computes the import graph between modules.

Key types:
- check_imports: Collect import diagnostics without raising
- validate: Return the program unchanged or raise ImportValidationError
- ImportGraph: Module dependency graph with a dependencies-first link order
"""

from ._diagnostics import (
    DiagnosticKind,
    ImportDiagnostic,
    MissingImportTarget,
    UndefinedExport,
    UnexportedImport,
)
from ._import_graph import ImportGraph
from ._validate import check_exports, check_imports, validate

__all__ = [
    "DiagnosticKind",
    "ImportDiagnostic",
    "ImportGraph",
    "MissingImportTarget",
    "UndefinedExport",
    "UnexportedImport",
    "check_exports",
    "check_imports",
    "validate",
]
