"""Filter catalogue and preview scaling helpers."""

from .filters import BUILTIN_FILTERS, FilterCatalog, FilterDescriptor, FilterFunction
from .scaling import PREVIEW_WIDTH, create_preview_image, preview_size, scale_image

__all__ = [
    "BUILTIN_FILTERS",
    "FilterCatalog",
    "FilterDescriptor",
    "FilterFunction",
    "PREVIEW_WIDTH",
    "create_preview_image",
    "preview_size",
    "scale_image",
]
