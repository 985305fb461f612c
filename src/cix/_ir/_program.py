"""Declarations and the top-level Program aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._nodes import Expression, Statement


@dataclass(frozen=True, slots=True)
class Param:
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    type: str


@dataclass(frozen=True, slots=True)
class Variable:
    """Global or module-level variable declaration.

    The type is an opaque C type name carried through verbatim.
    """

    name: str
    type: str
    value: Expression


@dataclass(frozen=True, slots=True)
class Function:
    name: str
    return_type: str
    params: tuple[Param, ...] = field(default_factory=tuple)
    body: tuple[Statement, ...] = field(default_factory=tuple)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(param.name for param in self.params)


@dataclass(frozen=True, slots=True)
class StructDef:
    name: str
    fields: tuple[Field, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Import:
    """Dependency of a module on functions exported by another module."""

    module_name: str
    functions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Module:
    """A named unit of declarations with exports and imports.

    Attributes:
        name: Module name, referenced by other modules' imports.
        exports: Names of this module's functions visible to importers.
        imports: Functions this module uses from other modules.
        variables: Module-level variables. At runtime they share one flat
            namespace with the program's global variables.
        functions: Function definitions, in declaration order.
        structs: Struct definitions, in declaration order.

    """

    name: str
    exports: tuple[str, ...] = field(default_factory=tuple)
    imports: tuple[Import, ...] = field(default_factory=tuple)
    variables: tuple[Variable, ...] = field(default_factory=tuple)
    functions: tuple[Function, ...] = field(default_factory=tuple)
    structs: tuple[StructDef, ...] = field(default_factory=tuple)

    def exported_functions(self) -> list[Function]:
        """Return the exported functions in declaration order."""
        return [func for func in self.functions if func.name in self.exports]


@dataclass(frozen=True, slots=True)
class Program:
    """Top-level IR aggregate consumed by the emitter and the interpreter.

    Every sequence is kept in declaration order. Programs are immutable;
    the builder functions return new Program values.
    """

    variables: tuple[Variable, ...] = field(default_factory=tuple)
    functions: tuple[Function, ...] = field(default_factory=tuple)
    structs: tuple[StructDef, ...] = field(default_factory=tuple)
    modules: tuple[Module, ...] = field(default_factory=tuple)

    def find_function(self, name: str) -> Function | None:
        """Resolve a function by name.

        Global functions are searched first, then each module's functions
        in module order.

        Args:
            name: The function name to look up.

        Returns:
            The first matching Function, or None if no function has that name.

        """
        for func in self.functions:
            if func.name == name:
                return func
        for module in self.modules:
            for func in module.functions:
                if func.name == name:
                    return func
        return None

    def find_module(self, name: str) -> Module | None:
        for module in self.modules:
            if module.name == name:
                return module
        return None

    def iter_variables(self) -> Iterator[Variable]:
        """Yield global variables, then each module's variables in module order."""
        yield from self.variables
        for module in self.modules:
            yield from module.variables

    def global_names(self) -> frozenset[str]:
        """Names living in the flat global namespace (program and module variables)."""
        return frozenset(var.name for var in self.iter_variables())
