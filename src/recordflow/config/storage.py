"""Where the local SQL record store lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "recordflow"
DEFAULT_DB_FILENAME: Final[str] = "records.db"


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Directory holding the SQLite database file."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @classmethod
    def from_environment(cls) -> StorageConfig:
        override = optional_env_var("RECORDFLOW_DATA_DIR")
        data_dir = Path(override) if override else _platform_data_home() / APP_DIR_NAME
        return cls(data_dir=data_dir.expanduser().resolve())

    def database_path(self, *, ensure: bool = True) -> Path:
        if ensure:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str

    @classmethod
    def from_environment(cls, *, storage: StorageConfig | None = None) -> DatabaseConfig:
        """``DATABASE_URI`` wins; otherwise a SQLite file under the data directory."""

        uri = optional_env_var("DATABASE_URI")
        if uri:
            return cls(uri=uri)
        return cls(uri=(storage or StorageConfig.from_environment()).database_uri())


def get_storage_config() -> StorageConfig:
    return StorageConfig.from_environment()


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    return DatabaseConfig.from_environment(storage=storage)
