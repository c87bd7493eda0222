"""Application configuration primitives."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the payroll database."""

    driver: str = "mysql+pymysql"
    user: str = "payroll"
    password: str = "payroll"
    host: str = "127.0.0.1"
    port: int = 3306
    name: str = "payroll"
    url: str | None = None

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            host=os.getenv("DB_HOST", defaults.host),
            port=_int("DB_PORT", defaults.port),
            name=os.getenv("DB_NAME", defaults.name),
            url=os.getenv("DB_URL") or None,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy compatible URL, preferring an explicit ``DB_URL``."""

        if self.url:
            return self.url
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        """URL safe for log output."""

        if self.url:
            return self.url.split("@")[-1] if "@" in self.url else self.url
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class LoggingSettings:
    """Where and how verbosely to log."""

    level: str = "INFO"
    log_dir: Path | None = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "LoggingSettings":
        """Read ``LOG_LEVEL`` and ``LOG_DIR``; file logging stays off unless ``LOG_DIR`` is set."""

        _load_env(dotenv_path)
        defaults = cls()
        raw_dir = os.getenv("LOG_DIR")
        if raw_dir is None:
            log_dir = defaults.log_dir
        else:
            log_dir = Path(raw_dir) if raw_dir.strip() else None
        return cls(level=os.getenv("LOG_LEVEL", defaults.level).upper(), log_dir=log_dir)


@dataclass(frozen=True)
class Settings:
    """Container for application configuration."""

    database: DatabaseSettings
    logging: LoggingSettings
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        return cls(
            database=DatabaseSettings.from_env(),
            logging=LoggingSettings.from_env(dotenv_path),
            sqlalchemy_echo=_flag("SQLALCHEMY_ECHO"),
        )


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
