"""Logging setup for recordflow entry points."""

from __future__ import annotations

import logging
from typing import Final

TRACE_LOGGER_NAME: Final[str] = "recordflow.trace"


def configure_logging(
    *,
    level: int = logging.INFO,
    trace_level: int | None = None,
    force: bool = False,
) -> None:
    """Initialise the root logger once with a terse stderr format.

    Pipeline trace lines forwarded by the local host go to the
    ``recordflow.trace`` logger; ``trace_level`` sets its threshold apart from
    the root level. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if trace_level is not None:
        logging.getLogger(TRACE_LOGGER_NAME).setLevel(trace_level)
