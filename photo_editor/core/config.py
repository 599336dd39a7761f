"""Editor configuration resolved from :class:`SettingsManager`."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QCoreApplication

from .settings_manager import SettingsManager


DEFAULT_PREVIEW_WIDTH = 150
DEFAULT_OUTPUT_DIRNAME = "PhotoEditor"

PREVIEW_WIDTH_KEY = "preview/width"
OUTPUT_DIRECTORY_KEY = "storage/output_directory"
MAX_WORKERS_KEY = "threads/max_workers"


def _tr(text: str) -> str:
    return QCoreApplication.translate("EditImageController", text)


@dataclass(frozen=True)
class ErrorMessages:
    """User facing texts for results that came back empty.

    The controllers decide *which* message applies; the wording itself is
    configuration and may be overridden per install or translated through Qt
    catalogues.
    """

    preview_unavailable: str = field(default_factory=lambda: _tr("cannot prepare image preview"))
    filters_unavailable: str = field(default_factory=lambda: _tr("cannot load image filters"))
    save_failed: str = field(default_factory=lambda: _tr("cannot save filtered image"))
    saved_images_unavailable: str = field(default_factory=lambda: _tr("cannot load saved images"))

    _KEYS = {
        "preview_unavailable": "messages/preview_unavailable",
        "filters_unavailable": "messages/filters_unavailable",
        "save_failed": "messages/save_failed",
        "saved_images_unavailable": "messages/saved_images_unavailable",
    }

    @classmethod
    def from_manager(cls, manager: SettingsManager) -> "ErrorMessages":
        defaults = cls()
        overrides = {
            attribute: manager.get_str(key, getattr(defaults, attribute))
            for attribute, key in cls._KEYS.items()
        }
        return cls(**overrides)


@dataclass(frozen=True)
class EditorSettings:
    """Resolved runtime options for the editor controllers."""

    preview_width: int = DEFAULT_PREVIEW_WIDTH
    output_directory: Path = field(
        default_factory=lambda: Path.home() / "Pictures" / DEFAULT_OUTPUT_DIRNAME
    )
    max_workers: Optional[int] = None
    messages: ErrorMessages = field(default_factory=ErrorMessages)

    @classmethod
    def from_manager(cls, manager: SettingsManager) -> "EditorSettings":
        defaults = cls()
        preview_width = manager.get_int(PREVIEW_WIDTH_KEY, defaults.preview_width)
        if preview_width <= 0:
            preview_width = defaults.preview_width
        output_directory = manager.get_str(OUTPUT_DIRECTORY_KEY)
        max_workers = manager.get_int(MAX_WORKERS_KEY, 0)
        return cls(
            preview_width=preview_width,
            output_directory=Path(output_directory).expanduser() if output_directory else defaults.output_directory,
            max_workers=max_workers if max_workers > 0 else None,
            messages=ErrorMessages.from_manager(manager),
        )


__all__ = [
    "DEFAULT_PREVIEW_WIDTH",
    "EditorSettings",
    "ErrorMessages",
    "MAX_WORKERS_KEY",
    "OUTPUT_DIRECTORY_KEY",
    "PREVIEW_WIDTH_KEY",
]
