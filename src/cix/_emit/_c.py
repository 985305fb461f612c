"""C source emitter."""

import logging
from collections.abc import Iterable
from typing import assert_never

from cix._ir import (
    Assign,
    BinaryOp,
    BinOp,
    Call,
    Expression,
    FieldAccess,
    Function,
    Literal,
    Module,
    Program,
    Return,
    Statement,
    StructDef,
    StructNew,
    Var,
    Variable,
)

from ._locals import LOCAL_TYPE, infer_locals

logger = logging.getLogger(__name__)

INDENT = "    "

_OPERATOR_SYMBOLS: dict[BinOp, str] = {
    BinOp.ADD: "+",
    BinOp.SUB: "-",
    BinOp.MUL: "*",
    BinOp.DIV: "/",
}


def format_literal(value: int | str) -> str:
    """Render a literal value as C source.

    Strings are quoted verbatim, so escape sequences already written in the
    literal (such as ``\\n``) pass through to the C compiler unchanged.
    """
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def emit_expression(expr: Expression) -> str:
    """Render an expression.

    Binary operations are rendered without added parentheses; grouping is
    whatever C operator precedence makes of the flattened text.
    """
    match expr:
        case Var(name):
            return name
        case Literal(value):
            return format_literal(value)
        case BinaryOp(op, left, right):
            return f"{emit_expression(left)} {_OPERATOR_SYMBOLS[op]} {emit_expression(right)}"
        case Call(name, args):
            return f"{name}({_emit_args(args)})"
        case StructNew(struct_name, fields):
            inits = ", ".join(f".{field_name} = {emit_expression(value)}" for field_name, value in fields)
            return f"({struct_name}){{{inits}}}"
        case FieldAccess(target, field):
            return f"{emit_expression(target)}.{field}"
        case _:
            assert_never(expr)


def _emit_args(args: Iterable[Expression]) -> str:
    return ", ".join(emit_expression(arg) for arg in args)


def emit_statement(stmt: Statement) -> str:
    match stmt:
        case Return(value):
            return f"return {emit_expression(value)};"
        case Assign(name, value):
            return f"{name} = {emit_expression(value)};"
        case Call(name, args):
            return f"{name}({_emit_args(args)});"
        case _:
            assert_never(stmt)


def _emit_params(func: Function) -> str:
    if not func.params:
        return "void"
    return ", ".join(f"{param.type} {param.name}" for param in func.params)


def emit_signature(func: Function) -> str:
    """Render a function prototype, e.g. ``int add(int x, int y);``."""
    return f"{func.return_type} {func.name}({_emit_params(func)});"


def emit_struct(struct_def: StructDef) -> str:
    fields = "\n".join(f"{INDENT}{field.type} {field.name};" for field in struct_def.fields)
    return f"typedef struct {{\n{fields}\n}} {struct_def.name};"


def emit_variable(var: Variable) -> str:
    return f"{var.type} {var.name} = {emit_expression(var.value)};"


def emit_function(func: Function, global_names: Iterable[str]) -> str:
    """Render a function definition, declaring inferred locals first.

    Args:
        func: The function to render.
        global_names: Names declared at file scope; assignments to these are
            not treated as locals.

    Returns:
        The C function definition.

    """
    local_decls = "\n".join(f"{INDENT}{LOCAL_TYPE} {name};" for name in infer_locals(func, global_names))
    body = "\n".join(f"{INDENT}{emit_statement(stmt)}" for stmt in func.body)
    function_body = f"{local_decls}\n{body}" if local_decls else body
    return f"{func.return_type} {func.name}({_emit_params(func)}) {{\n{function_body}\n}}"


def _join_sections(sections: Iterable[str]) -> str:
    return "\n\n".join(section for section in sections if section)


def _emit_declarations(
    structs: Iterable[StructDef],
    variables: Iterable[Variable],
    functions: Iterable[Function],
    global_names: frozenset[str],
) -> str:
    return _join_sections(
        [
            "\n\n".join(emit_struct(s) for s in structs),
            "\n".join(emit_variable(v) for v in variables),
            "\n\n".join(emit_function(f, global_names) for f in functions),
        ],
    )


def _emit_module(module: Module, global_names: frozenset[str]) -> str:
    body = _emit_declarations(module.structs, module.variables, module.functions, global_names)
    return _join_sections([f"// Module: {module.name}", body])


def emit(program: Program) -> str:
    """Convert a Program to C source text.

    Without modules the output is structs, then variables, then functions.
    With modules, forward declarations for every exported function come
    first, then any top-level declarations, then one commented block per
    module. Empty groups are omitted and groups are separated by a blank
    line. No ``#include`` directives are produced.

    Forward declarations precede every struct typedef, top-level or
    module. An exported function whose signature names a struct of the
    program therefore only compiles when that struct is also declared by
    one of the included headers.

    Args:
        program: The program to emit. It is not modified.

    Returns:
        The C source text.

    """
    global_names = program.global_names()
    top_level = _emit_declarations(program.structs, program.variables, program.functions, global_names)

    if not program.modules:
        logger.debug("Emitting flat program with %d functions", len(program.functions))
        return top_level

    logger.debug("Emitting %d modules", len(program.modules))
    headers = "\n".join(emit_signature(func) for module in program.modules for func in module.exported_functions())
    modules = [_emit_module(module, global_names) for module in program.modules]
    return _join_sections([headers, top_level, *modules])


def render_translation_unit(program: Program, includes: Iterable[str] = ("stdio.h",)) -> str:
    """Emit a complete C file: include directives followed by the program."""
    directives = "\n".join(f"#include <{header}>" for header in includes)
    return _join_sections([directives, emit(program)]) + "\n"
