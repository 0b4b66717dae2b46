"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum


class _DisplayNameMixin:
    name: str

    @property
    def display_name(self) -> str:
        """CamelCase rendering used in trace output (``PRE_OPERATION`` -> ``PreOperation``)."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class PipelineStage(_DisplayNameMixin, IntEnum):
    PRE_VALIDATION = 10
    PRE_OPERATION = 20
    MAIN_OPERATION = 30
    POST_OPERATION = 40


class ExecutionMode(_DisplayNameMixin, IntEnum):
    SYNCHRONOUS = 0
    ASYNCHRONOUS = 1
