"""Logging setup for the photo editor.

Every module logs through ``logging.getLogger(__name__)`` and tags records
with an ``extra={"component": ...}`` field naming the controller or slot that
emitted them. :class:`LoggingConfigurator` attaches the handlers once at
start-up (CLI or Qt application) to the ``photo_editor`` logger.
"""
from __future__ import annotations

import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_LOG_FILENAME = "photo_editor.log"
DEFAULT_LOG_DIRNAME = "logs"
LOG_LEVEL_ENV = "PHOTO_EDITOR_LOG_LEVEL"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class _ComponentSafeFormatter(logging.Formatter):
    """Fill in ``component`` for records logged without one."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting is hard to unit test reliably
        if not hasattr(record, "component"):
            record.component = record.name
        return super().format(record)


@dataclass
class LoggingOptions:
    """Runtime options for configuring the logging subsystem."""

    log_directory: Optional[os.PathLike] = None
    level: int = logging.INFO
    enable_console: bool = True
    enable_file: bool = True
    developer_diagnostics: bool = False
    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3
    logger_name: str = "photo_editor"


class LoggingConfigurator:
    """Attach console and rotating file handlers to the editor logger."""

    def __init__(self, options: Optional[LoggingOptions] = None) -> None:
        self.options = options or LoggingOptions()
        self.logger = logging.getLogger(self.options.logger_name)

    def resolve_level(self) -> int:
        """Return the effective level, honouring ``PHOTO_EDITOR_LOG_LEVEL``."""

        if self.options.developer_diagnostics:
            return logging.DEBUG
        override = (os.getenv(LOG_LEVEL_ENV) or "").strip().lower()
        return _LEVELS.get(override, self.options.level)

    def configure(self) -> logging.Logger:
        """Initialise logging handlers based on the provided options."""

        level = self.resolve_level()
        self.logger.setLevel(level)
        self._clear_existing_handlers()

        if self.options.enable_file:
            log_path = self.log_path()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=self.options.max_bytes,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(self._build_formatter(detailed=False))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        if self.options.enable_console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(self._build_formatter(detailed=self.options.developer_diagnostics))
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        self.logger.propagate = False
        self.logger.debug("Logging configured", extra={"component": "LoggingConfigurator"})
        return self.logger

    def log_path(self) -> Path:
        base_dir = (
            Path(self.options.log_directory)
            if self.options.log_directory is not None
            else Path.home() / DEFAULT_LOG_DIRNAME
        )
        return base_dir / DEFAULT_LOG_FILENAME

    def _clear_existing_handlers(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    @staticmethod
    def _build_formatter(detailed: bool) -> logging.Formatter:
        if detailed:
            format_string = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s:%(lineno)d | %(message)s"
        else:
            format_string = "%(asctime)s | %(levelname)s | %(component)s | %(message)s"
        return _ComponentSafeFormatter(format_string)


__all__ = ["LoggingConfigurator", "LoggingOptions", "LOG_LEVEL_ENV"]
