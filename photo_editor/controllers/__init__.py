"""Controllers publishing editor operation state to the presentation layer."""

from .edit_image_controller import (
    EditImageController,
    FilterEnumerationPipeline,
    FilterListState,
    PreviewPipeline,
    PreviewState,
    SavePipeline,
    SaveState,
)
from .saved_images_controller import SavedImagesPipeline, SavedImagesState

__all__ = [
    "EditImageController",
    "FilterEnumerationPipeline",
    "FilterListState",
    "PreviewPipeline",
    "PreviewState",
    "SavePipeline",
    "SaveState",
    "SavedImagesPipeline",
    "SavedImagesState",
]
