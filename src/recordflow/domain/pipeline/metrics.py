"""Timing helpers."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def time_call(action: Callable[[], object]) -> float:
    """Run ``action`` and return its wall-clock duration in milliseconds."""

    started = time.perf_counter()
    action()
    return (time.perf_counter() - started) * 1000
