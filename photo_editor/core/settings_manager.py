"""Settings manager built on top of QSettings with JSON import/export support."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from PyQt5.QtCore import QSettings


class SettingsManager:
    """High level interface around QSettings supporting JSON serialisation.

    By default the platform's native store for ``organization``/``application``
    is used. Passing ``path`` stores the settings in an INI file instead,
    which is what the CLI and the tests rely on.
    """

    def __init__(
        self,
        organization: str = "PhotoEditor",
        application: str = "PhotoEditor",
        *,
        path: Optional[Path | str] = None,
    ) -> None:
        if path is not None:
            self._settings = QSettings(str(path), QSettings.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        self.organization = organization
        self.application = application
        self.path = Path(path) if path is not None else None

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self._settings.value(key, default)

    def get_int(self, key: str, default: int) -> int:
        """Return ``key`` as an integer; INI backends hand values back as text."""

        value = self._settings.value(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._settings.value(key, default)
        if value is None:
            return default
        return str(value)

    def contains(self, key: str) -> bool:
        return bool(self._settings.contains(key))

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._settings.sync()

    def clear(self) -> None:
        self._settings.clear()
        self._settings.sync()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key in self._all_keys():
            result[key] = self._settings.value(key)
        return result

    def from_dict(self, values: Dict[str, Any], *, clear: bool = False) -> None:
        if clear:
            self.clear()
        for key, value in values.items():
            self._settings.setValue(key, value)
        self._settings.sync()

    @property
    def backend(self) -> QSettings:
        """Return the underlying :class:`QSettings` object."""

        return self._settings

    def export_json(self, path: Path) -> None:
        path = Path(path)
        data = self.to_dict()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)

    def import_json(self, path: Path, *, clear: bool = False) -> None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("Settings JSON must describe an object")
        self.from_dict(data, clear=clear)

    def _all_keys(self) -> List[str]:
        return [str(key) for key in self._settings.allKeys()]


__all__ = ["SettingsManager"]
