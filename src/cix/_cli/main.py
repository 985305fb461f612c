import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from cix._emit import render_translation_unit
from cix._errors import CixError, ImportCycleError, ImportValidationError
from cix._interp import execute
from cix._ir import Program
from cix._link import ImportGraph, validate

from .config import CixConfig, ConfigError, get_config
from .discover import (
    ProgramLoadError,
    load_program_from_module_path,
    load_program_from_script,
    load_program_from_source,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

PathArgument = Annotated[
    str | None,
    typer.Argument(
        help="Path to Python script or module path (e.g., examples.calculator:program). "
        "Defaults to the program configured in pyproject.toml",
    ),
]
ProgramOption = Annotated[
    str | None,
    typer.Option("--program", help="Name of the program variable (for script paths only)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Cix CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _resolve_program(path: str | None, program_var: str | None, config: CixConfig) -> Program:
    if path is None:
        if config.program is None:
            err_console.print("[red]No program given and no \\[tool.cix].program configured[/red]")
            raise typer.Exit(code=2)
        err_console.print(f"[cyan]Loading program from config:[/cyan] {escape(str(config.program))}")
        return load_program_from_source(config.program)

    if ":" in path:
        err_console.print(f"[cyan]Loading program from module:[/cyan] {escape(path)}")
        return load_program_from_module_path(path)

    script_path = Path(path)
    err_console.print(f"[cyan]Loading program from script:[/cyan] {escape(str(script_path))}")
    return load_program_from_script(script_path, program_var)


def _load_program(path: str | None, program_var: str | None, config: CixConfig) -> Program:
    """Load the program named on the command line, or the configured one."""
    try:
        return _resolve_program(path, program_var, config)
    except ProgramLoadError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e


def _config_or_exit() -> CixConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e


@app.command()
def emit(
    path: PathArgument = None,
    *,
    program_var: ProgramOption = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output C file (default: configured output or stdout)"),
    ] = None,
    includes: Annotated[
        bool,
        typer.Option("--includes/--no-includes", help="Prepend the configured #include directives"),
    ] = True,
) -> None:
    """Emit C source code for a program."""
    config = _config_or_exit()
    program = _load_program(path, program_var, config)

    code = render_translation_unit(program, config.includes if includes else ())
    output = output or config.output

    if output is None:
        typer.echo(code, nl=False)
        return

    err_console.print(f"[cyan]Writing C source to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(code)
    err_console.print("[green]✓ Emission complete[/green]")


@app.command()
def run(
    path: PathArgument = None,
    args: Annotated[
        list[int] | None,
        typer.Argument(help="Integer arguments for the entry function"),
    ] = None,
    *,
    program_var: ProgramOption = None,
    entry: Annotated[
        str | None,
        typer.Option("-e", "--entry", help="Function to execute (default: configured entry or main)"),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Fail on calls to unknown functions instead of yielding 0"),
    ] = None,
) -> None:
    """Execute a program with the interpreter and print the result."""
    config = _config_or_exit()
    program = _load_program(path, program_var, config)
    entry_name = entry or config.entry
    strict_mode = config.strict if strict is None else strict

    err_console.print(f"[cyan]Executing:[/cyan] {entry_name}({', '.join(map(str, args or []))})")
    try:
        result = execute(program, entry_name, args or [], strict=strict_mode)
    except CixError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    out_console.print(repr(result), markup=False, highlight=False)


@app.command()
def check(
    path: PathArgument = None,
    *,
    program_var: ProgramOption = None,
    exports: Annotated[
        bool,
        typer.Option("--exports", help="Also check that every export names a function of its module"),
    ] = False,
) -> None:
    """Check that every module import resolves."""
    config = _config_or_exit()
    program = _load_program(path, program_var, config)
    err_console.print()
    err_console.print("[cyan]Validating imports...[/cyan]")

    try:
        validate(program, exports=exports)
    except ImportValidationError as e:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Kind", style="dim")
        table.add_column("Problem")
        for diagnostic in e.diagnostics:
            table.add_row(str(diagnostic.kind), escape(diagnostic.message))
        err_console.print(Panel(table, title="[bold]Import Errors[/bold]", border_style="red"))
        err_console.print(f"[red]✗ {len(e.diagnostics)} import error(s)[/red]")
        raise typer.Exit(code=1) from e

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Module", style="bold")
    table.add_column("Functions", justify="right", style="yellow")
    table.add_column("Exports", justify="right", style="green")
    table.add_column("Imports", justify="right")

    for module in program.modules:
        n_imported = sum(len(imp.functions) for imp in module.imports)
        table.add_row(escape(module.name), str(len(module.functions)), str(len(module.exports)), str(n_imported))

    err_console.print(
        Panel(
            table,
            title="[bold]Modules[/bold]",
            subtitle=f"[dim]{len(program.modules)} modules, {len(program.functions)} top-level functions[/dim]",
            border_style="cyan",
        ),
    )
    err_console.print("[green]✓ All imports resolve[/green]")


@app.command()
def graph(
    path: PathArgument = None,
    *,
    program_var: ProgramOption = None,
) -> None:
    """Show the module import graph and link order."""
    config = _config_or_exit()
    program = _load_program(path, program_var, config)
    import_graph = ImportGraph.from_program(program)

    tree = Tree("[bold]Modules[/bold]")
    for name in import_graph.modules:
        branch = tree.add(f"[bold]{escape(name)}[/bold]")
        module = program.find_module(name)
        for imp in module.imports if module is not None else ():
            style = "green" if imp.module_name in import_graph else "red"
            functions = ", ".join(imp.functions)
            branch.add(f"[{style}]{escape(imp.module_name)}[/{style}]: {escape(functions)}")
    out_console.print(tree)

    try:
        order = import_graph.link_order()
    except ImportCycleError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    out_console.print(f"[cyan]Link order:[/cyan] {escape(' -> '.join(order))}")


if __name__ == "__main__":
    app()
