"""Logging setup for the payroll package: rich console output plus daily log files."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .timing import timeit

__all__ = [
    "DailyFileHandler",
    "LoggingConfig",
    "get_logger",
    "init_logging",
    "shutdown_logging",
    "timeit",
]

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    app_name: str = "payroll"
    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    queue: bool = True


_lock = RLock()
_active: LoggingConfig | None = None
_listener: QueueListener | None = None
_installed: list[logging.Handler] = []


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """File handler that rolls over to ``<dir>/YYYY_MM_DD.log`` when the day changes."""

    def __init__(self, directory: Path, *, encoding: str = "utf-8") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._day: date = datetime.now().date()
        super().__init__(self.path_for(self._day), mode="a", encoding=encoding)

    def path_for(self, day: date) -> Path:
        return self.directory / f"{day.strftime('%Y_%m_%d')}.log"

    def emit(self, record: logging.LogRecord) -> None:
        record_day = datetime.fromtimestamp(record.created).date()
        if record_day != self._day:
            self._day = record_day
            if self.stream:
                self.stream.close()
            self.baseFilename = os.fspath(self.path_for(record_day))
            self.stream = self._open()
        super().emit(record)


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setLevel(level)
        handlers.append(console_handler)

    if cfg.log_dir:
        file_handler = DailyFileHandler(Path(cfg.log_dir))
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    return handlers


def init_logging(**kwargs: object) -> None:
    """Configure the root logger.

    Repeated calls with the same options are no-ops; different options tear
    down the previous handlers first.
    """

    global _active, _listener

    with _lock:
        cfg = LoggingConfig()
        for key, value in kwargs.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)

        if _active is not None:
            if _active == cfg:
                return
            _teardown_locked()

        level = _parse_level(cfg.level)
        root = logging.getLogger()
        root.setLevel(logging.NOTSET)

        handlers = _build_handlers(cfg, level)
        _installed.extend(handlers)
        if cfg.queue and handlers:
            log_queue: SimpleQueue = SimpleQueue()
            queue_handler = QueueHandler(log_queue)
            queue_handler.setLevel(level)
            root.addHandler(queue_handler)
            _installed.append(queue_handler)
            _listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
            _listener.start()
        else:
            for handler in handlers:
                root.addHandler(handler)

        _active = cfg


def _teardown_locked() -> None:
    global _active, _listener
    if _listener is not None:
        _listener.stop()
    _listener = None
    _active = None
    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()


def shutdown_logging() -> None:
    """Stop the queue listener and drop all handlers, intended for tests."""

    with _lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger, configuring logging from settings on first use."""

    with _lock:
        if _active is None:
            from payroll.core.config import LoggingSettings

            settings = LoggingSettings.from_env()
            init_logging(level=settings.level, log_dir=settings.log_dir)
    return logging.getLogger(name or (_active or LoggingConfig()).app_name)
