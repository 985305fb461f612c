"""Variable storage for a single execution."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from ._values import Value


@dataclass(slots=True)
class Environment:
    """Name bindings for one ``execute`` call.

    Global and module variables live in one flat ``globals`` table. Every
    function call pushes its own frame for parameters and locals, so nested
    and recursive calls cannot overwrite each other's bindings.

    Attributes:
        globals: Global and module variable values.
        frames: Stack of per-call bindings, innermost last.

    """

    globals: dict[str, Value] = field(default_factory=dict)
    frames: list[dict[str, Value]] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.frames)

    def lookup(self, name: str) -> Value:
        """Resolve a name in the current frame, then globals, defaulting to 0."""
        if self.frames and name in self.frames[-1]:
            return self.frames[-1][name]
        return self.globals.get(name, 0)

    def assign(self, name: str, value: Value) -> None:
        """Bind a name.

        A name already bound in the current frame is updated there. Otherwise
        an existing global is updated, and any other name becomes a local of
        the current frame. Outside any call everything is global.
        """
        if not self.frames:
            self.globals[name] = value
            return
        frame = self.frames[-1]
        if name not in frame and name in self.globals:
            self.globals[name] = value
        else:
            frame[name] = value

    def define_global(self, name: str, value: Value) -> None:
        self.globals[name] = value

    @contextmanager
    def call_frame(self, bindings: Mapping[str, Value]) -> Iterator[dict[str, Value]]:
        """Push a frame holding ``bindings`` for the duration of a call."""
        frame = dict(bindings)
        self.frames.append(frame)
        try:
            yield frame
        finally:
            self.frames.pop()
