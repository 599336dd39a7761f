"""Decode and encode raster images for the editor.

Pixel data travels through the editor as a :class:`RasterImage`, which couples
a :class:`numpy.ndarray` (``H x W`` or ``H x W x C``, RGB channel order) with a
free-form metadata ``dict``. Files are read and written with :mod:`Pillow`;
the loader captures the format, mode, size and any EXIF/ICC payloads so that
saving a filtered copy can carry them forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from photo_editor.core.errors import ImageDecodeError


SUPPORTED_RASTER_SUFFIXES = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}


@dataclass(eq=False)
class RasterImage:
    """Container coupling decoded pixel data with associated metadata."""

    data: np.ndarray
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` like :attr:`PIL.Image.Image.size`."""

        return self.width, self.height

    def to_array(self) -> np.ndarray:
        return np.asarray(self.data)

    def copy(self) -> "RasterImage":
        return RasterImage(data=self.to_array().copy(), metadata=dict(self.metadata))

    def with_data(self, data: np.ndarray) -> "RasterImage":
        """Return a new image carrying ``data`` and a copy of this metadata."""

        metadata = dict(self.metadata)
        metadata["size"] = (int(data.shape[1]), int(data.shape[0]))
        return RasterImage(data=data, metadata=metadata)

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.to_array())

    @classmethod
    def from_pil(cls, image: Image.Image, metadata: Optional[Dict[str, Any]] = None) -> "RasterImage":
        return cls(data=np.array(image), metadata=dict(metadata or {}))


def decode_image(path: Path | str) -> Optional[RasterImage]:
    """Decode ``path`` into a :class:`RasterImage`.

    Returns ``None`` when the file exists but Pillow cannot identify it as an
    image. A missing file raises :class:`FileNotFoundError`; a recognised file
    whose pixel data is truncated or corrupt raises :class:`ImageDecodeError`.
    """

    resolved = Path(path).expanduser()
    if not resolved.is_file():
        raise FileNotFoundError(resolved)

    try:
        img = Image.open(resolved)
    except UnidentifiedImageError:
        return None

    with img:
        metadata: Dict[str, Any] = {
            "format": img.format,
            "mode": img.mode,
            "info": {key: value for key, value in img.info.items() if key not in {"exif", "icc_profile"}},
            "source": str(resolved),
        }
        icc_profile = img.info.get("icc_profile")
        if icc_profile:
            metadata["icc_profile"] = icc_profile

        # PNG reads its EXIF chunk by loading the pixels, so it shares the guard.
        try:
            exif = img.getexif()
            if exif:
                metadata["exif"] = exif.tobytes()
            upright = ImageOps.exif_transpose(img)
            if upright.mode not in ("L", "RGB", "RGBA"):
                upright = upright.convert("RGBA" if "A" in upright.getbands() else "RGB")
            array = np.array(upright)
        except (OSError, SyntaxError, ValueError) as exc:
            raise ImageDecodeError(f"Cannot read pixels from {resolved.name}: {exc}") from exc

    metadata["size"] = (int(array.shape[1]), int(array.shape[0]))
    return RasterImage(data=array, metadata=metadata)


def _prepare_save_metadata(metadata: Mapping[str, Any] | None) -> Dict[str, Any]:
    if not metadata:
        return {}
    save_args: Dict[str, Any] = {}

    info = metadata.get("info")
    if isinstance(info, Mapping):
        dpi = info.get("dpi")
        if dpi is not None:
            save_args["dpi"] = dpi

    icc_profile = metadata.get("icc_profile")
    if icc_profile is not None:
        save_args["icc_profile"] = icc_profile

    return save_args


def encode_image(image: RasterImage, path: Path | str, format: Optional[str] = None) -> Path:
    """Persist ``image`` to ``path`` and return the written location."""

    destination = Path(path).expanduser()
    destination.parent.mkdir(parents=True, exist_ok=True)

    fmt = (format or destination.suffix.lstrip(".")).upper()
    if destination.suffix.lower() not in SUPPORTED_RASTER_SUFFIXES and f".{fmt.lower()}" not in SUPPORTED_RASTER_SUFFIXES:
        raise ValueError(f"Unsupported image format for saving: {fmt}")

    pil_format = {"JPG": "JPEG", "TIF": "TIFF"}.get(fmt, fmt)
    pil_image = image.to_pil()
    if pil_format == "JPEG" and pil_image.mode == "RGBA":
        pil_image = pil_image.convert("RGB")
    pil_image.save(destination, format=pil_format, **_prepare_save_metadata(image.metadata))
    return destination


__all__ = ["RasterImage", "SUPPORTED_RASTER_SUFFIXES", "decode_image", "encode_image"]
