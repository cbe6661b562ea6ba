from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.exceptions import StorageError
from ..core.settings import DatabaseSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_settings(cls, db: DatabaseSettings) -> "DBConfig":
        return cls(host=db.host, port=db.port, user=db.user, password=db.password, database=db.database)


class DatabaseConnection:
    """Process-wide factory for short-lived MySQL connections.

    Each repository call opens its own connection through db_cursor and closes
    it when done, so nothing here is shared between requests.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def target(self) -> str:
        return f"{self._config.user}@{self._config.host}:{self._config.port}/{self._config.database}"

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                charset="utf8mb4",
                connection_timeout=self._config.connect_timeout,
            )
        except mysql.connector.Error as e:
            logger.error("MySQL connect failed target=%s: %s", self.target, e)
            raise StorageError("Database unavailable") from e
