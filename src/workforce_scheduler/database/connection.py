from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "workforce_db"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
            connect_timeout=int(db_config.get("connect_timeout", defaults.connect_timeout)),
        )

    def describe(self) -> str:
        """Log-safe target description (no password)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Opens MySQL connections for one configured database.

    Connections are not pooled or shared between threads; each repository
    call opens its own and closes it when its transaction ends.
    """

    _shared: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def shared(cls, config: DBConfig) -> "DatabaseConnection":
        """The process-wide factory; the first config wins."""
        if cls._shared is None:
            cls._shared = cls(config)
        return cls._shared

    def connect(self, *, with_database: bool = True):
        params: dict[str, Any] = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
            "connection_timeout": self._config.connect_timeout,
            "autocommit": False,
        }
        if with_database:
            params["database"] = self._config.database
        return mysql.connector.connect(**params)
