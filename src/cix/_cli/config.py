"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, ValidationError

from cix._errors import CixError


class ConfigError(CixError):
    """Error in cix configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional variable name."""

    script: Path
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.calculator:program')."""

    module_path: str


ProgramSource = ScriptSource | ModuleSource


class CixConfig(BaseModel):
    """Configuration loaded from the ``[tool.cix]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).

    Attributes:
        program: Where the CLI loads the Program from when no path is given.
        entry: Default entry function for ``cix run``.
        includes: Headers ``cix emit`` includes before the generated code.
        strict: Default for ``cix run --strict``.
        output: Default output file for ``cix emit``.
        project_root: Directory containing pyproject.toml.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    program: ProgramSource | None = None
    entry: str = "main"
    includes: tuple[str, ...] = ("stdio.h",)
    strict: bool = False
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_program_source(value: object, project_root: Path) -> ProgramSource:
    """Parse the program field from config.

    Args:
        value: The raw value from TOML (string or dict)
        project_root: Project root directory for resolving relative paths

    Returns:
        Parsed ProgramSource

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        # Script path format: { script = "path.py", name = "program" }
        value_dict = cast("dict[str, object]", value)
        script_value = value_dict.get("script")
        if not isinstance(script_value, str):
            msg = "Invalid [tool.cix].program.script: expected string path"
            raise ConfigError(msg)
        script_path = Path(script_value)
        if not script_path.is_absolute():
            script_path = project_root / script_path

        name = value_dict.get("name")
        if name is not None and not isinstance(name, str):
            msg = "Invalid [tool.cix].program.name: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=script_path, name=name)

    msg = "Invalid [tool.cix].program configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def load_config(pyproject_path: Path) -> CixConfig:
    """Load and validate [tool.cix] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed CixConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    cix_section = dict(data.get("tool", {}).get("cix", {}))
    if "program" in cix_section:
        cix_section["program"] = _parse_program_source(cix_section["program"], project_root)

    try:
        config = CixConfig.model_validate({**cix_section, "project_root": project_root})
    except ValidationError as e:
        msg = f"Invalid [tool.cix] configuration in {pyproject_path}:\n{e}"
        raise ConfigError(msg) from e

    if config.output is not None and not config.output.is_absolute():
        config = config.model_copy(update={"output": project_root / config.output})
    return config


def get_config() -> CixConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        CixConfig (defaults if no pyproject.toml or no [tool.cix] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return CixConfig()
    return load_config(pyproject_path)
