"""Exception types raised by cix."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cix._link import ImportDiagnostic


class CixError(Exception):
    """Base class for all cix errors."""


class FunctionNotFoundError(CixError):
    """A function could not be resolved by name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Function {name} not found")


class EvaluationError(CixError):
    """The interpreter could not evaluate an expression."""


class ImportValidationError(CixError):
    """One or more module imports did not resolve.

    All diagnostics found in a single pass are carried together.
    """

    def __init__(self, diagnostics: Iterable[ImportDiagnostic]) -> None:
        self.diagnostics = tuple(diagnostics)
        lines = "\n".join(f"  - {d.message}" for d in self.diagnostics)
        super().__init__(f"{len(self.diagnostics)} import error(s):\n{lines}")


class ImportCycleError(CixError):
    """Modules import each other in a cycle, so no link order exists."""
