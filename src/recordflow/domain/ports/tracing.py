"""Port for the host's trace log."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TraceBoundary(Protocol):
    """Fire-and-forget sink for formatted trace lines."""

    def write(self, line: str) -> None: ...
