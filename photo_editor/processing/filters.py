"""Built-in visual filters and the catalogue that lists them.

Each filter is a plain function mapping an RGB ``uint8`` array to a new
array of the same height and width. The :class:`FilterCatalog` keeps them in
display order and renders a thumbnail of every filter against the (already
downscaled) preview image when the editor asks for the filter list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import cv2
import numpy as np

from photo_editor.core.errors import FilterNotFoundError
from photo_editor.data.image_io import RasterImage


LOGGER = logging.getLogger(__name__)

FilterFunction = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True, eq=False)
class FilterDescriptor:
    """One selectable filter, optionally with a rendered preview thumbnail."""

    identifier: str
    title: str
    function: FilterFunction
    preview: Optional[RasterImage] = None

    def apply(self, image: RasterImage) -> RasterImage:
        """Run the filter against ``image`` and return the filtered copy."""

        return image.with_data(self.function(image.to_array()))

    def with_preview(self, preview: RasterImage) -> "FilterDescriptor":
        return FilterDescriptor(self.identifier, self.title, self.function, preview)


def _as_rgb(image: np.ndarray) -> np.ndarray:
    """Return a three channel ``uint8`` view of ``image``."""

    if image.dtype != np.uint8:
        image = cv2.convertScaleAbs(image)
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image


def normal(image: np.ndarray) -> np.ndarray:
    return _as_rgb(image).copy()


def grayscale(image: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(_as_rgb(image), cv2.COLOR_RGB2GRAY)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB)


_SEPIA_KERNEL = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)


def sepia(image: np.ndarray) -> np.ndarray:
    toned = cv2.transform(_as_rgb(image).astype(np.float32), _SEPIA_KERNEL)
    return np.clip(toned, 0, 255).astype(np.uint8)


def invert(image: np.ndarray) -> np.ndarray:
    return cv2.bitwise_not(_as_rgb(image))


def brighten(image: np.ndarray) -> np.ndarray:
    return cv2.convertScaleAbs(_as_rgb(image), alpha=1.0, beta=40)


def contrast(image: np.ndarray) -> np.ndarray:
    return cv2.convertScaleAbs(_as_rgb(image), alpha=1.4, beta=-40)


def _shift_channels(image: np.ndarray, red: int, blue: int) -> np.ndarray:
    r, g, b = cv2.split(_as_rgb(image).astype(np.int16))
    r = np.clip(r + red, 0, 255)
    b = np.clip(b + blue, 0, 255)
    return cv2.merge([r, g, b]).astype(np.uint8)


def warm(image: np.ndarray) -> np.ndarray:
    return _shift_channels(image, red=30, blue=-30)


def cool(image: np.ndarray) -> np.ndarray:
    return _shift_channels(image, red=-30, blue=30)


def blur(image: np.ndarray) -> np.ndarray:
    return cv2.GaussianBlur(_as_rgb(image), (5, 5), 0)


def sharpen(image: np.ndarray) -> np.ndarray:
    rgb = _as_rgb(image)
    blurred = cv2.GaussianBlur(rgb, (0, 0), sigmaX=3)
    return cv2.addWeighted(rgb, 2.0, blurred, -1.0, 0)


_EMBOSS_KERNEL = np.array([[-2, -1, 0], [-1, 1, 1], [0, 1, 2]], dtype=np.float32)


def emboss(image: np.ndarray) -> np.ndarray:
    return cv2.filter2D(_as_rgb(image), -1, _EMBOSS_KERNEL)


def sketch(image: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(_as_rgb(image), cv2.COLOR_RGB2GRAY)
    inverted_blur = cv2.GaussianBlur(cv2.bitwise_not(gray), (21, 21), 0)
    drawing = cv2.divide(gray, cv2.bitwise_not(inverted_blur), scale=256.0)
    return cv2.cvtColor(drawing, cv2.COLOR_GRAY2RGB)


BUILTIN_FILTERS: Tuple[Tuple[str, str, FilterFunction], ...] = (
    ("normal", "Normal", normal),
    ("grayscale", "Grayscale", grayscale),
    ("sepia", "Sepia", sepia),
    ("invert", "Invert", invert),
    ("brighten", "Brighten", brighten),
    ("contrast", "Contrast", contrast),
    ("warm", "Warm", warm),
    ("cool", "Cool", cool),
    ("blur", "Blur", blur),
    ("sharpen", "Sharpen", sharpen),
    ("emboss", "Emboss", emboss),
    ("sketch", "Sketch", sketch),
)


class FilterCatalog:
    """Ordered registry of the filters offered to the user."""

    def __init__(self, filters: Optional[Iterable[Tuple[str, str, FilterFunction]]] = None) -> None:
        self._filters: Dict[str, FilterDescriptor] = {}
        for identifier, title, function in BUILTIN_FILTERS if filters is None else filters:
            self.register(identifier, title, function)

    def register(self, identifier: str, title: str, function: FilterFunction) -> FilterDescriptor:
        """Add or replace a filter; replacing keeps its original position."""

        descriptor = FilterDescriptor(identifier=identifier, title=title, function=function)
        self._filters[identifier] = descriptor
        LOGGER.debug("Filter registered: %s", identifier)
        return descriptor

    def get(self, identifier: str) -> FilterDescriptor:
        try:
            return self._filters[identifier]
        except KeyError:
            raise FilterNotFoundError(f"Unknown filter '{identifier}'") from None

    def identifiers(self) -> List[str]:
        return list(self._filters)

    def __iter__(self) -> Iterator[FilterDescriptor]:
        return iter(list(self._filters.values()))

    def __len__(self) -> int:
        return len(self._filters)

    def list_filters(self, preview: RasterImage) -> List[FilterDescriptor]:
        """Return every filter with a thumbnail rendered from ``preview``.

        A filter that fails on this particular preview is left out of the
        list rather than failing the whole enumeration.
        """

        listed: List[FilterDescriptor] = []
        for descriptor in self:
            try:
                rendered = descriptor.apply(preview)
            except (cv2.error, ValueError) as exc:
                LOGGER.warning(
                    "Skipping filter %s: %s",
                    descriptor.identifier,
                    exc,
                    extra={"component": "FilterCatalog"},
                )
                continue
            listed.append(descriptor.with_preview(rendered))
        return listed


__all__ = ["BUILTIN_FILTERS", "FilterCatalog", "FilterDescriptor", "FilterFunction"]
