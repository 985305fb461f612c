"""Import validation across the modules of a program."""

import logging

from cix._errors import ImportValidationError
from cix._ir import Import, Module, Program

from ._diagnostics import ImportDiagnostic, MissingImportTarget, UndefinedExport, UnexportedImport

logger = logging.getLogger(__name__)


def _check_import(imp: Import, importing_module: str, modules: dict[str, Module]) -> list[ImportDiagnostic]:
    target = modules.get(imp.module_name)
    if target is None:
        return [MissingImportTarget(importing_module=importing_module, target_module=imp.module_name)]

    return [
        UnexportedImport(importing_module=importing_module, function=func, target_module=imp.module_name)
        for func in imp.functions
        if func not in target.exports
    ]


def check_imports(program: Program) -> list[ImportDiagnostic]:
    """Check that every module import resolves.

    For each import of each module: a missing target module yields one
    MissingImportTarget; otherwise every imported name the target does not
    export yields one UnexportedImport. All findings are collected.

    Args:
        program: The program whose modules are checked.

    Returns:
        Diagnostics in module order, then import order. Empty if all
        imports resolve.

    """
    modules: dict[str, Module] = {}
    for module in program.modules:
        # The first module with a given name wins, as in function lookup.
        modules.setdefault(module.name, module)

    diagnostics: list[ImportDiagnostic] = []
    for module in program.modules:
        for imp in module.imports:
            diagnostics.extend(_check_import(imp, module.name, modules))
    return diagnostics


def check_exports(program: Program) -> list[ImportDiagnostic]:
    """Report exports that do not name a function of their own module."""
    diagnostics: list[ImportDiagnostic] = []
    for module in program.modules:
        defined = {func.name for func in module.functions}
        diagnostics.extend(
            UndefinedExport(module=module.name, function=name) for name in module.exports if name not in defined
        )
    return diagnostics


def validate(program: Program, *, exports: bool = False) -> Program:
    """Validate module imports, reporting every problem at once.

    Validation never modifies the program, so it is idempotent:
    ``validate(validate(p)) is p``.

    Args:
        program: The program to validate.
        exports: Also check that every export names a function of its module.

    Returns:
        The same Program object.

    Raises:
        ImportValidationError: Carrying all diagnostics found.

    """
    diagnostics = check_imports(program)
    if exports:
        diagnostics.extend(check_exports(program))

    if diagnostics:
        logger.debug("Validation found %d problem(s)", len(diagnostics))
        raise ImportValidationError(diagnostics)

    logger.debug("Validated imports of %d modules", len(program.modules))
    return program
