"""Application configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
import math
import os


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the PostgreSQL database."""

    host: str
    port: int
    dbname: str
    user: str
    password: str
    connect_timeout: int

    def connect_kwargs(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.user,
            "password": self.password,
            "connect_timeout": self.connect_timeout,
        }


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the premium API process."""

    database: DatabaseConfig
    jwt_secret_key: str
    jwt_algorithm: str
    log_level: str
    cors_origins: Tuple[str, ...] = field(default_factory=tuple)


def _to_int(value: Optional[str], *, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Expected integer value, got {value!r}") from exc


def _parse_connect_timeout(raw_value: Optional[str]) -> int:
    if raw_value is None or raw_value == "":
        return 5
    try:
        timeout = float(raw_value)
    except ValueError as exc:
        raise ValueError("DB_CONNECT_TIMEOUT must be a number") from exc
    if timeout < 0:
        raise ValueError("DB_CONNECT_TIMEOUT must be non-negative")
    return int(math.ceil(timeout))


def _to_tuple(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def load_app_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load :class:`AppConfig` from environment variables."""

    env_mapping = os.environ if env is None else env

    database = DatabaseConfig(
        host=env_mapping.get("DB_HOST", "127.0.0.1"),
        port=_to_int(env_mapping.get("DB_PORT"), default=5432),
        dbname=env_mapping.get("DB_NAME", "tia_market"),
        user=env_mapping.get("DB_USER", "postgres"),
        password=env_mapping.get("DB_PASSWORD", ""),
        connect_timeout=_parse_connect_timeout(env_mapping.get("DB_CONNECT_TIMEOUT")),
    )

    log_level = (env_mapping.get("LOG_LEVEL") or "INFO").strip().upper() or "INFO"

    return AppConfig(
        database=database,
        jwt_secret_key=env_mapping.get("JWT_SECRET_KEY", "dev-secret-change-me"),
        jwt_algorithm=env_mapping.get("JWT_ALGORITHM", "HS256"),
        log_level=log_level,
        cors_origins=_to_tuple(env_mapping.get("CORS_ORIGINS")),
    )
