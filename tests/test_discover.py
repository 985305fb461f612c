"""Tests for loading programs from scripts and module paths."""

import sys
from pathlib import Path

import pytest

from cix import Program
from cix._cli.config import ModuleSource, ScriptSource
from cix._cli.discover import (
    ProgramLoadError,
    get_module_data_from_path,
    load_program_from_module_path,
    load_program_from_script,
    load_program_from_source,
)

TWO_PROGRAMS = """
from cix import add_function, new

program = add_function(new(), "main", "int")
other = add_function(new(), "other", "int")
"""


def _write(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


class TestModuleData:
    def test_plain_script(self, tmp_path: Path) -> None:
        script = _write(tmp_path / "demo.py", "")

        data = get_module_data_from_path(script)

        assert data.module_import_str == "demo"
        assert data.extra_sys_path == tmp_path.resolve()

    def test_script_inside_package(self, tmp_path: Path) -> None:
        _write(tmp_path / "pkg" / "__init__.py", "")
        script = _write(tmp_path / "pkg" / "demo.py", "")

        data = get_module_data_from_path(script)

        assert data.module_import_str == "pkg.demo"
        assert data.extra_sys_path == tmp_path.resolve()


class TestLoadFromScript:
    def test_single_program_is_inferred(self, tmp_path: Path) -> None:
        script = _write(
            tmp_path / f"single_{tmp_path.name}.py",
            "from cix import add_function, new\n\nmy_program = add_function(new(), 'main', 'int')\n",
        )

        program = load_program_from_script(script)

        assert isinstance(program, Program)
        assert program.functions[0].name == "main"

    def test_program_attribute_wins_when_several(self, tmp_path: Path) -> None:
        script = _write(tmp_path / f"several_{tmp_path.name}.py", TWO_PROGRAMS)

        assert load_program_from_script(script).functions[0].name == "main"

    def test_named_program(self, tmp_path: Path) -> None:
        script = _write(tmp_path / f"named_{tmp_path.name}.py", TWO_PROGRAMS)

        assert load_program_from_script(script, "other").functions[0].name == "other"

    def test_ambiguous(self, tmp_path: Path) -> None:
        script = _write(
            tmp_path / f"ambiguous_{tmp_path.name}.py",
            "from cix import new\n\nfirst = new()\nsecond = new()\n",
        )

        with pytest.raises(ProgramLoadError, match="first, second"):
            load_program_from_script(script)

    def test_no_program(self, tmp_path: Path) -> None:
        script = _write(tmp_path / f"empty_{tmp_path.name}.py", "value = 1\n")

        with pytest.raises(ProgramLoadError, match="Could not find a Program"):
            load_program_from_script(script)

    def test_named_variable_is_not_a_program(self, tmp_path: Path) -> None:
        script = _write(tmp_path / f"notprog_{tmp_path.name}.py", "value = 1\n")

        with pytest.raises(ProgramLoadError, match="int, not a Program"):
            load_program_from_script(script, "value")

    def test_missing_script(self, tmp_path: Path) -> None:
        with pytest.raises(ProgramLoadError, match="Script not found"):
            load_program_from_script(tmp_path / "missing.py")

    def test_sys_path_is_restored(self, tmp_path: Path) -> None:
        script = _write(tmp_path / f"restore_{tmp_path.name}.py", TWO_PROGRAMS)
        before = list(sys.path)

        load_program_from_script(script)

        assert sys.path == before


class TestLoadFromModulePath:
    def test_module_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        module_name = f"modpath_{tmp_path.name}"
        _write(tmp_path / f"{module_name}.py", TWO_PROGRAMS)
        monkeypatch.syspath_prepend(str(tmp_path))

        program = load_program_from_module_path(f"{module_name}:other")

        assert program.functions[0].name == "other"

    @pytest.mark.parametrize("module_path", ["no_colon", ":program", "module:"])
    def test_malformed(self, module_path: str) -> None:
        with pytest.raises(ProgramLoadError, match="module.path:variable_name"):
            load_program_from_module_path(module_path)

    def test_unknown_module(self) -> None:
        with pytest.raises(ProgramLoadError, match="Could not import"):
            load_program_from_module_path("cix_no_such_module:program")


def test_load_from_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    module_name = f"source_{tmp_path.name}"
    script = _write(tmp_path / f"{module_name}.py", TWO_PROGRAMS)
    monkeypatch.syspath_prepend(str(tmp_path))

    from_script = load_program_from_source(ScriptSource(script=script, name="other"))
    from_module = load_program_from_source(ModuleSource(module_path=f"{module_name}:program"))

    assert from_script.functions[0].name == "other"
    assert from_module.functions[0].name == "main"
