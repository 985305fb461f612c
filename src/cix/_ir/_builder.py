"""Builder functions to construct IR programs incrementally.

Every function here is total: nothing is validated at construction time.
Duplicate names and dangling imports are only reported later by the linker.
New declarations are appended, so all sequences stay in declaration order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import TypeAlias

from ._nodes import Expression, Statement, as_expression
from ._program import Field, Function, Import, Module, Param, Program, StructDef, Variable

ParamLike: TypeAlias = Param | tuple[str, str]
FieldLike: TypeAlias = Field | tuple[str, str]
ImportsLike: TypeAlias = Iterable[Import] | Mapping[str, Iterable[str]]


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicate names, keeping first-appearance order."""
    return tuple(dict.fromkeys(names))


def _to_params(params: Iterable[ParamLike]) -> tuple[Param, ...]:
    return tuple(p if isinstance(p, Param) else Param(name=p[0], type=p[1]) for p in params)


def _to_fields(fields: Iterable[FieldLike]) -> tuple[Field, ...]:
    return tuple(f if isinstance(f, Field) else Field(name=f[0], type=f[1]) for f in fields)


def _to_imports(imports: ImportsLike) -> tuple[Import, ...]:
    if isinstance(imports, Mapping):
        return tuple(
            Import(module_name=module_name, functions=_unique(functions)) for module_name, functions in imports.items()
        )
    return tuple(replace(imp, functions=_unique(imp.functions)) for imp in imports)


def variable(name: str, type_: str, value: Expression | int | str) -> Variable:
    """Create a Variable, wrapping a bare int or str value in a Literal."""
    return Variable(name=name, type=type_, value=as_expression(value))


def function(
    name: str,
    return_type: str,
    params: Iterable[ParamLike] = (),
    body: Iterable[Statement] = (),
) -> Function:
    """Create a Function.

    Args:
        name: Function name.
        return_type: C return type, carried verbatim.
        params: Parameters as Param values or ``(name, type)`` pairs.
        body: Statements in execution order.

    Returns:
        The new Function.

    """
    return Function(name=name, return_type=return_type, params=_to_params(params), body=tuple(body))


def struct(name: str, fields: Iterable[FieldLike] = ()) -> StructDef:
    return StructDef(name=name, fields=_to_fields(fields))


def module(  # noqa: PLR0913
    name: str,
    *,
    exports: Iterable[str] = (),
    imports: ImportsLike = (),
    variables: Iterable[Variable] = (),
    functions: Iterable[Function] = (),
    structs: Iterable[StructDef] = (),
) -> Module:
    """Create a Module.

    Imports may be given as Import values or as a mapping from module name
    to the imported function names, e.g. ``{"math": ["add", "multiply"]}``.
    Exported and imported names behave as sets: duplicates are dropped.
    """
    return Module(
        name=name,
        exports=_unique(exports),
        imports=_to_imports(imports),
        variables=tuple(variables),
        functions=tuple(functions),
        structs=tuple(structs),
    )


def new() -> Program:
    """Create an empty Program."""
    return Program()


def add_variable(program: Program, name: str, type_: str, value: Expression | int | str) -> Program:
    return replace(program, variables=(*program.variables, variable(name, type_, value)))


def add_function(
    program: Program,
    name: str,
    return_type: str,
    params: Iterable[ParamLike] = (),
    body: Iterable[Statement] = (),
) -> Program:
    return replace(program, functions=(*program.functions, function(name, return_type, params, body)))


def add_struct(program: Program, name: str, fields: Iterable[FieldLike] = ()) -> Program:
    return replace(program, structs=(*program.structs, struct(name, fields)))


def add_module(  # noqa: PLR0913
    program: Program,
    name: str,
    exports: Iterable[str] = (),
    imports: ImportsLike = (),
    variables: Iterable[Variable] = (),
    functions: Iterable[Function] = (),
    structs: Iterable[StructDef] = (),
) -> Program:
    """Return a new Program with one more module appended.

    Example:
        >>> program = add_module(
        ...     new(),
        ...     "main",
        ...     imports={"math": ["add"]},
        ...     functions=[function("main", "int", body=[Return(Call("add", (Literal(1), Literal(2))))])],
        ... )
        >>> program.modules[0].imports
        (Import(module_name='math', functions=('add',)),)

    """
    new_module = module(
        name,
        exports=exports,
        imports=imports,
        variables=variables,
        functions=functions,
        structs=structs,
    )
    return replace(program, modules=(*program.modules, new_module))


def merge(programs: Iterable[Program]) -> Program:
    """Combine programs into one.

    Each field is concatenated across all inputs, preserving the order
    within every input and taking inputs first to last. No deduplication
    is done.

    Args:
        programs: Programs to combine.

    Returns:
        A new Program holding every declaration of every input.

    """
    variables: list[Variable] = []
    functions: list[Function] = []
    structs: list[StructDef] = []
    modules: list[Module] = []

    for program in programs:
        variables.extend(program.variables)
        functions.extend(program.functions)
        structs.extend(program.structs)
        modules.extend(program.modules)

    return Program(
        variables=tuple(variables),
        functions=tuple(functions),
        structs=tuple(structs),
        modules=tuple(modules),
    )
