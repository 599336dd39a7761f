"""Downscaling used before rendering filter thumbnails."""
from __future__ import annotations

import logging

import cv2

from photo_editor.data.image_io import RasterImage


LOGGER = logging.getLogger(__name__)

PREVIEW_WIDTH = 150


def preview_size(width: int, height: int, target_width: int = PREVIEW_WIDTH) -> tuple[int, int]:
    """Return ``(target_width, round(height * target_width / width))``.

    Raises :class:`ZeroDivisionError` for a zero width source.
    """

    return target_width, int(round(height * target_width / width))


def scale_image(image: RasterImage, width: int, height: int) -> RasterImage:
    """Resize ``image`` to ``width`` x ``height`` without smoothing."""

    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot scale to {width}x{height}")
    resized = cv2.resize(image.to_array(), (width, height), interpolation=cv2.INTER_NEAREST)
    return image.with_data(resized)


def create_preview_image(image: RasterImage, target_width: int = PREVIEW_WIDTH) -> RasterImage:
    """Return a nearest-neighbour copy of ``image`` that is ``target_width`` wide.

    Any failure while scaling returns ``image`` itself unchanged.
    """

    try:
        width, height = preview_size(image.width, image.height, target_width)
        return scale_image(image, width, height)
    except Exception as exc:
        LOGGER.debug(
            "Preview downscale failed, using original image: %s",
            exc,
            extra={"component": "FilterEnumerationPipeline"},
        )
        return image


__all__ = ["PREVIEW_WIDTH", "create_preview_image", "preview_size", "scale_image"]
