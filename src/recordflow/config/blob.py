"""Parse the ``key:value`` configuration blobs registered with a pipeline step."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

TRACE_MESSAGE_STACK: Final[str] = "TraceMessageStack"
PRESERVE_FIELDS: Final[str] = "PreserveFields"
_LINE_BREAK: Final = re.compile(r"\r?\n")


def parse_config_blob(text: str | None) -> dict[str, str]:
    """Parse newline separated ``key:value`` lines into a table.

    The first colon separates key from value. Blank lines and lines without a
    colon are skipped. A repeated key ends the parse; whatever was read up to
    that point is returned. This function never raises.
    """

    table: dict[str, str] = {}
    if not text:
        return table

    for line in _LINE_BREAK.split(text):
        if not line.strip() or ":" not in line:
            continue
        key, value = line.split(":", 1)
        if key in table:
            log.warning("Duplicate configuration key %r; ignoring the rest of the blob", key)
            break
        table[key] = value
    return table


def parse_bool(value: str | None) -> bool | None:
    """Lenient boolean parsing: ``true``/``false`` in any case, padded or not."""

    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


@dataclass(frozen=True, slots=True)
class PipelineConfiguration:
    """The two configuration blobs of a pipeline step, raw and parsed."""

    unsecure: str = ""
    secure: str = ""
    unsecure_values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    secure_values: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def parse(cls, unsecure: str | None = "", secure: str | None = "") -> PipelineConfiguration:
        return cls(
            unsecure=unsecure or "",
            secure=secure or "",
            unsecure_values=MappingProxyType(parse_config_blob(unsecure)),
            secure_values=MappingProxyType(parse_config_blob(secure)),
        )

    @property
    def trace_message_stack(self) -> bool:
        return parse_bool(self.unsecure_values.get(TRACE_MESSAGE_STACK)) is True

    @property
    def preserve_fields(self) -> frozenset[str]:
        raw = self.unsecure_values.get(PRESERVE_FIELDS, "")
        return frozenset(name.strip() for name in raw.split(",") if name.strip())
