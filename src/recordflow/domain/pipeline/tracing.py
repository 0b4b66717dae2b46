"""Timestamped tracing over the host's trace boundary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from recordflow.domain.ports import TraceBoundary

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class TraceContext:
    """Stopwatch state for one execution."""

    first_trace_at: datetime
    previous_trace_at: datetime

    def lap(self, now: datetime) -> tuple[float, float]:
        """Return (ms since first trace, ms since previous trace) and advance."""

        total = (now - self.first_trace_at).total_seconds() * 1000
        delta = (now - self.previous_trace_at).total_seconds() * 1000
        self.previous_trace_at = now
        return total, delta


class TracingSink:
    """Prefix each trace line with a UTC timestamp, total elapsed and delta times.

    ``started_at`` is normally the host's operation creation time; a naive value
    is read as UTC. Since host clocks may drift it is clamped so that it never
    lies in the future.
    Failures while formatting or writing a line are logged and swallowed.
    """

    def __init__(
        self,
        boundary: TraceBoundary,
        *,
        started_at: datetime | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._boundary = boundary
        self._clock = clock
        now = clock()
        if started_at is not None and started_at.tzinfo is None:
            started_at = started_at.replace(tzinfo=UTC)
        initial = now if started_at is None or started_at > now else started_at
        self.context = TraceContext(first_trace_at=initial, previous_trace_at=initial)
        self.trace("Timestamped tracing initialized.")

    def trace(self, message: str, *args: object) -> None:
        try:
            now = self._clock()
            text = message.format(*args) if args else message
            total, delta = self.context.lap(now)
            self._boundary.write(
                f"[{now.isoformat()} - @{total:,.0f}ms (+{delta:,.0f}ms)] - {text}"
            )
        except Exception:
            log.warning("Dropped trace line %r", message, exc_info=True)
