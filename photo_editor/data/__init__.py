"""Data layer: image decoding/encoding and the repositories built on it."""

from . import image_io
from .image_io import SUPPORTED_RASTER_SUFFIXES, RasterImage, decode_image, encode_image
from .repositories import (
    EditImageRepository,
    LocalEditImageRepository,
    LocalSavedImageRepository,
    SavedImage,
    SavedImageRepository,
)

__all__ = [
    "EditImageRepository",
    "LocalEditImageRepository",
    "LocalSavedImageRepository",
    "RasterImage",
    "SUPPORTED_RASTER_SUFFIXES",
    "SavedImage",
    "SavedImageRepository",
    "decode_image",
    "encode_image",
    "image_io",
]
