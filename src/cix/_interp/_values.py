"""Runtime values produced by the interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class StructValue:
    """An instance of a struct, tagged with its struct name."""

    struct_name: str
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, name: str) -> Value:
        """Return a field's value, or 0 when the struct has no such field."""
        return self.fields.get(name, 0)


# None is the unit value of a function that finishes without returning.
Value: TypeAlias = int | str | StructValue | None
