"""Structured findings reported by the module linker."""

from dataclasses import dataclass
from enum import StrEnum


class DiagnosticKind(StrEnum):
    MISSING_IMPORT_TARGET = "missing_import_target"  # Imported module does not exist
    UNEXPORTED_IMPORT = "unexported_import"  # Imported function is not exported by its module
    UNDEFINED_EXPORT = "undefined_export"  # Exported name has no function in its module


@dataclass(frozen=True, slots=True)
class MissingImportTarget:
    """A module imports from a module that does not exist."""

    importing_module: str
    target_module: str

    kind = DiagnosticKind.MISSING_IMPORT_TARGET

    @property
    def message(self) -> str:
        return (
            f"Module '{self.importing_module}' imports from '{self.target_module}' "
            f"but '{self.target_module}' does not exist"
        )


@dataclass(frozen=True, slots=True)
class UnexportedImport:
    """A module imports a function its target module does not export."""

    importing_module: str
    function: str
    target_module: str

    kind = DiagnosticKind.UNEXPORTED_IMPORT

    @property
    def message(self) -> str:
        return (
            f"Module '{self.importing_module}' imports function '{self.function}' "
            f"from '{self.target_module}' but '{self.function}' is not exported"
        )


@dataclass(frozen=True, slots=True)
class UndefinedExport:
    """A module exports a name that is not one of its functions."""

    module: str
    function: str

    kind = DiagnosticKind.UNDEFINED_EXPORT

    @property
    def message(self) -> str:
        return f"Module '{self.module}' exports '{self.function}' but defines no such function"


ImportDiagnostic = MissingImportTarget | UnexportedImport | UndefinedExport
