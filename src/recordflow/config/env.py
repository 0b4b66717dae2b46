"""Read configuration values from the process environment."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def _non_blank(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Return every named variable; blank counts as missing and all gaps are reported at once."""

    found = {name: _non_blank(name) for name in names}
    missing = sorted(name for name, value in found.items() if value is None)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return {name: value for name, value in found.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars((name,))[name]


def optional_env_var(name: str) -> str | None:
    return _non_blank(name)


def env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``, falling back to ``default`` when unset."""

    raw = _non_blank(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {name}: {raw!r} is not a number") from exc
    if value <= 0:
        raise ConfigurationError(f"Invalid {name}: {raw!r} must be positive")
    return value
