"""Dependency graph between the modules of a program."""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cix._errors import ImportCycleError

if TYPE_CHECKING:
    from cix._ir import Program


@dataclass(frozen=True, slots=True, eq=False)
class ImportGraph:
    """Which modules import which.

    Only imports whose target module exists become edges; dangling imports
    are the validator's concern. The edge maps are plain dicts, so graphs
    compare and hash by identity.

    Attributes:
        modules: Module names in program order.
        _imports: Mapping from module to the modules it imports from.
        _importers: Mapping from module to the modules importing from it.

    """

    modules: tuple[str, ...] = field(default_factory=tuple)
    _imports: dict[str, frozenset[str]] = field(default_factory=dict)
    _importers: dict[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_program(cls, program: Program) -> ImportGraph:
        names = tuple(dict.fromkeys(module.name for module in program.modules))
        known = set(names)
        imports: defaultdict[str, set[str]] = defaultdict(set)
        importers: defaultdict[str, set[str]] = defaultdict(set)

        for module in program.modules:
            for imp in module.imports:
                if imp.module_name in known:
                    imports[module.name].add(imp.module_name)
                    importers[imp.module_name].add(module.name)

        return cls(
            modules=names,
            _imports={k: frozenset(v) for k, v in imports.items()},
            _importers={k: frozenset(v) for k, v in importers.items()},
        )

    def imports_of(self, module: str) -> frozenset[str]:
        """Modules that ``module`` directly imports from."""
        return self._imports.get(module, frozenset())

    def importers_of(self, module: str) -> frozenset[str]:
        """Modules that directly import from ``module``."""
        return self._importers.get(module, frozenset())

    def link_order(self) -> list[str]:
        """Order modules so every module comes after the modules it imports.

        Ties keep program order.

        Returns:
            Module names, dependencies first.

        Raises:
            ImportCycleError: If the modules import each other in a cycle.

        """
        indegree = {name: len(self.imports_of(name)) for name in self.modules}
        queue = deque(name for name in self.modules if indegree[name] == 0)
        order: list[str] = []

        while queue:
            name = queue.popleft()
            order.append(name)
            for importer in sorted(self.importers_of(name), key=self.modules.index):
                indegree[importer] -= 1
                if indegree[importer] == 0:
                    queue.append(importer)

        if len(order) != len(self.modules):
            cyclic = [name for name in self.modules if name not in order]
            msg = f"Import cycle among modules: {', '.join(cyclic)}"
            raise ImportCycleError(msg)

        return order

    def has_cycle(self) -> bool:
        try:
            self.link_order()
        except ImportCycleError:
            return True
        return False

    def __len__(self) -> int:
        return len(self.modules)

    def __contains__(self, module: str) -> bool:
        return module in self.modules
