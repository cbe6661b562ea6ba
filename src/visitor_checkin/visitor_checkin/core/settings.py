from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any

from .constants import MAX_RESUME_BYTES
from .exceptions import ConfigurationError

_REQUIRED_DB_KEYS = ("host", "user", "database")


@dataclass(frozen=True)
class DatabaseSettings:
    host: str
    port: int
    user: str
    password: str
    database: str

    def as_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


@dataclass(frozen=True)
class AppSettings:
    """Validated application settings, built once at process start."""

    secret_key: str
    db: DatabaseSettings
    upload_dir: str
    public_form_url: str
    max_resume_bytes: int = MAX_RESUME_BYTES
    debug: bool = False
    testing: bool = False
    auto_init_db: bool = False
    auto_seed_db: bool = False


def _require(settings: ModuleType, name: str) -> Any:
    value = getattr(settings, name, None)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ConfigurationError(f"Missing setting: {name}")
    return value


def load_settings(settings: ModuleType) -> AppSettings:
    """Build AppSettings from a config module (config.development, ...).

    Raises ConfigurationError listing what is missing instead of failing later
    at first use.
    """

    db_config = _require(settings, "DB_CONFIG")
    if not isinstance(db_config, dict):
        raise ConfigurationError("DB_CONFIG must be a dict")

    missing = [k for k in _REQUIRED_DB_KEYS if not db_config.get(k)]
    # An empty password is fine for a local MySQL, an absent key is not.
    if "password" not in db_config:
        missing.append("password")
    if missing:
        raise ConfigurationError(f"DB_CONFIG is incomplete: missing {', '.join(missing)}")

    try:
        port = int(db_config.get("port", 3306))
        max_resume_bytes = int(getattr(settings, "MAX_RESUME_BYTES", MAX_RESUME_BYTES))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    if max_resume_bytes <= 0:
        raise ConfigurationError("MAX_RESUME_BYTES must be positive")

    return AppSettings(
        secret_key=str(_require(settings, "SECRET_KEY")),
        db=DatabaseSettings(
            host=str(db_config["host"]),
            port=port,
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
        ),
        upload_dir=str(_require(settings, "UPLOAD_DIR")),
        public_form_url=str(_require(settings, "PUBLIC_FORM_URL")).rstrip("/"),
        max_resume_bytes=max_resume_bytes,
        debug=bool(getattr(settings, "DEBUG", False)),
        testing=bool(getattr(settings, "TESTING", False)),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        auto_seed_db=bool(getattr(settings, "AUTO_SEED_DB", False)),
    )
