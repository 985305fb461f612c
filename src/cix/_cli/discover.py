"""Utilities to discover cix programs in Python modules.

The module-path resolution was adapted from `fastapi_cli.discover` of package `fastapi-cli` version 0.0.8 (77e6d1f).
"""

from __future__ import annotations

import importlib
import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cix._errors import CixError
from cix._ir import Program

from .config import ModuleSource, ScriptSource

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import ModuleType

    from .config import ProgramSource

logger = logging.getLogger(__name__)

# Attribute picked when a module defines several programs and none is named.
DEFAULT_PROGRAM_NAME = "program"


class ProgramLoadError(CixError):
    """A Program could not be loaded from a script or module."""


@dataclass
class ModuleData:
    """Import information for a Python file."""

    module_import_str: str
    extra_sys_path: Path
    module_paths: list[Path]


def get_module_data_from_path(path: Path) -> ModuleData:
    """Work out the dotted import name of a file.

    Parent directories holding an ``__init__.py`` are treated as packages, so
    ``examples/pkg/demo.py`` inside a package ``pkg`` imports as ``pkg.demo``
    with ``examples/`` added to ``sys.path``.
    """
    use_path = path.resolve()
    module_path = use_path.parent if use_path.is_file() and use_path.stem == "__init__" else use_path
    module_paths = [module_path]
    extra_sys_path = module_path.parent
    for parent in module_path.parents:
        if not (parent / "__init__.py").is_file():
            break
        module_paths.insert(0, parent)
        extra_sys_path = parent.parent

    return ModuleData(
        module_import_str=".".join(p.stem for p in module_paths),
        extra_sys_path=extra_sys_path.resolve(),
        module_paths=module_paths,
    )


@contextmanager
def _extra_sys_path(path: Path) -> Iterator[None]:
    entry = str(path)
    sys.path.insert(0, entry)
    try:
        yield
    finally:
        sys.path.remove(entry)


def _import(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Could not import '{module_name}': {e}"
        raise ProgramLoadError(msg) from e


def _named_program(module: ModuleType, program_name: str) -> Program:
    if not hasattr(module, program_name):
        msg = f"Could not find program '{program_name}' in {module.__name__}"
        raise ProgramLoadError(msg)
    program = getattr(module, program_name)
    if not isinstance(program, Program):
        msg = f"'{program_name}' in {module.__name__} is a {type(program).__name__}, not a Program"
        raise ProgramLoadError(msg)
    return program


def _infer_program(module: ModuleType) -> Program:
    """Pick the module's Program when no name was given.

    A single Program attribute is used as is. With several, the one named
    ``program`` wins; otherwise the choice is ambiguous.
    """
    candidates = {name: obj for name, obj in vars(module).items() if isinstance(obj, Program)}
    if len(candidates) == 1:
        ((name, program),) = candidates.items()
        logger.debug("Found program: %s", name)
        return program
    if DEFAULT_PROGRAM_NAME in candidates:
        return candidates[DEFAULT_PROGRAM_NAME]
    if not candidates:
        msg = f"Could not find a Program in {module.__name__}, try using --program"
    else:
        msg = f"Found several programs in {module.__name__} ({', '.join(candidates)}), choose one with --program"
    raise ProgramLoadError(msg)


def load_program_from_script(script_path: Path, program_name: str | None = None) -> Program:
    """Load a program from a Python script path.

    Args:
        script_path: Path to the Python script defining the program
        program_name: Name of the program variable. If None, the script's
            only Program (or the one named ``program``) is used

    Returns:
        The loaded Program

    Raises:
        ProgramLoadError: If the script cannot be imported or does not
            define the requested Program

    """
    if not script_path.is_file():
        msg = f"Script not found: {script_path}"
        raise ProgramLoadError(msg)

    module_data = get_module_data_from_path(script_path)
    with _extra_sys_path(module_data.extra_sys_path):
        try:
            module = _import(module_data.module_import_str)
        except ProgramLoadError:
            logger.warning("Ensure all the package directories have an __init__.py file")
            raise

    if program_name:
        return _named_program(module, program_name)
    return _infer_program(module)


def load_program_from_module_path(module_path: str) -> Program:
    """Load a program from a module path (e.g., 'examples.calculator:program').

    Raises:
        ProgramLoadError: If the path is malformed, the module cannot be
            imported, or the variable is not a Program

    """
    module_name, sep, program_name = module_path.partition(":")
    if not sep or not module_name or not program_name:
        msg = f"Module path must be in format 'module.path:variable_name', got '{module_path}'"
        raise ProgramLoadError(msg)
    return _named_program(_import(module_name), program_name)


def load_program_from_source(source: ProgramSource) -> Program:
    """Load a program from a ProgramSource (script or module)."""
    match source:
        case ScriptSource(script=script, name=name):
            return load_program_from_script(script, name)
        case ModuleSource(module_path=module_path):
            return load_program_from_module_path(module_path)
