"""Remote record store (HTTP) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_float, optional_env_var, require_env_var

DEFAULT_STORE_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class HttpStoreConfig:
    """Endpoint, bearer token and per-request timeout of the HTTP store."""

    base_url: str
    token: str | None = None
    timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS

    @classmethod
    def from_environment(cls) -> HttpStoreConfig:
        return cls(
            base_url=require_env_var("RECORDFLOW_STORE_URL"),
            token=optional_env_var("RECORDFLOW_STORE_TOKEN"),
            timeout_seconds=env_float("RECORDFLOW_STORE_TIMEOUT", DEFAULT_STORE_TIMEOUT_SECONDS),
        )


def get_http_store_config() -> HttpStoreConfig:
    return HttpStoreConfig.from_environment()
