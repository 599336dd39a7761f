"""Top level package for the photo editor controllers."""

from __future__ import annotations

from importlib import metadata as _importlib_metadata


def _resolve_distribution_version() -> str:
    """Best-effort retrieval of the installed package version."""

    for name in ("photo-editor", "photo_editor"):
        try:
            return _importlib_metadata.version(name)
        except _importlib_metadata.PackageNotFoundError:  # pragma: no cover - metadata lookup
            continue
    return "0.0.0"


__version__ = _resolve_distribution_version()


def get_version() -> str:
    """Return the discovered package version."""

    return __version__


__all__ = ["__version__", "get_version"]
