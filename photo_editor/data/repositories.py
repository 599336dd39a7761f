"""Collaborators that decode, list and persist images for the controllers.

The controllers only depend on the two protocols defined here. The local
implementations read and write files on disk with Pillow and take the filter
list from a :class:`~photo_editor.processing.filters.FilterCatalog`.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, Tuple

from photo_editor.core.errors import ImageDecodeError

from .image_io import SUPPORTED_RASTER_SUFFIXES, RasterImage, decode_image, encode_image

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from photo_editor.processing.filters import FilterCatalog, FilterDescriptor


LOGGER = logging.getLogger(__name__)

SavedImage = Tuple[Path, RasterImage]


class EditImageRepository(Protocol):
    """Operations backing the edit screen."""

    def prepare_image_preview(self, source: Path | str) -> Optional[RasterImage]:
        """Decode ``source``; ``None`` when it is not a decodable image."""

    def get_image_filters(self, preview: RasterImage) -> Optional[List["FilterDescriptor"]]:
        """Return the filters available for ``preview``."""

    def save_filtered_image(self, image: RasterImage) -> Optional[Path]:
        """Persist ``image``; ``None`` when nothing could be written."""


class SavedImageRepository(Protocol):
    """Read access to previously saved images."""

    def load_saved_images(self) -> Optional[List[SavedImage]]:
        """Return ``(path, image)`` pairs, or ``None`` when unavailable."""


def _saved_image_name() -> str:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"IMG_{stamp}_{uuid.uuid4().hex[:8]}.png"


class LocalEditImageRepository:
    """File system backed :class:`EditImageRepository`."""

    def __init__(self, output_directory: Path | str, catalog: "FilterCatalog") -> None:
        self.output_directory = Path(output_directory).expanduser()
        self.catalog = catalog

    def prepare_image_preview(self, source: Path | str) -> Optional[RasterImage]:
        image = decode_image(source)
        if image is None:
            LOGGER.info("Source is not a decodable image: %s", source, extra={"component": "LocalEditImageRepository"})
        return image

    def get_image_filters(self, preview: RasterImage) -> Optional[List["FilterDescriptor"]]:
        return self.catalog.list_filters(preview)

    def save_filtered_image(self, image: RasterImage) -> Optional[Path]:
        if image.to_array().size == 0:
            return None
        destination = self.output_directory / _saved_image_name()
        written = encode_image(image, destination, format="PNG")
        LOGGER.info("Filtered image saved to %s", written, extra={"component": "LocalEditImageRepository"})
        return written


class LocalSavedImageRepository:
    """Lists the images a :class:`LocalEditImageRepository` has written."""

    def __init__(
        self,
        directory: Path | str,
        *,
        suffixes: Sequence[str] = tuple(sorted(SUPPORTED_RASTER_SUFFIXES)),
    ) -> None:
        self.directory = Path(directory).expanduser()
        self.suffixes = {suffix.lower() for suffix in suffixes}

    def load_saved_images(self) -> Optional[List[SavedImage]]:
        if not self.directory.is_dir():
            return None
        candidates = [
            path
            for path in self.directory.iterdir()
            if path.is_file() and path.suffix.lower() in self.suffixes
        ]
        candidates.sort(key=lambda path: (path.stat().st_mtime, path.name), reverse=True)

        saved: List[SavedImage] = []
        for path in candidates:
            try:
                image = decode_image(path)
            except ImageDecodeError as exc:
                LOGGER.warning("Skipping corrupt image %s: %s", path, exc)
                continue
            if image is None:
                LOGGER.debug("Skipping undecodable file %s", path)
                continue
            saved.append((path, image))
        return saved


__all__ = [
    "EditImageRepository",
    "LocalEditImageRepository",
    "LocalSavedImageRepository",
    "SavedImage",
    "SavedImageRepository",
]
