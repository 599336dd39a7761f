"""Controllers behind the edit screen.

Each pipeline owns one :class:`~photo_editor.core.state.ObservableSlot` and
runs a single repository operation through the shared
:class:`~photo_editor.core.commands.AsyncCommandController`. Views subscribe
to the slots; they never call the repository themselves.

Calls are not de-duplicated. Invoking an entry point while a previous call
is still running starts a second independent operation, and whichever of the
two finishes last decides the slot's final state.
"""

from __future__ import annotations

import concurrent.futures
import logging
from pathlib import Path
from typing import List, Optional

from photo_editor.core.commands import AsyncCommandController
from photo_editor.core.config import EditorSettings, ErrorMessages
from photo_editor.core.state import ObservableSlot, OperationState
from photo_editor.data.image_io import RasterImage
from photo_editor.data.repositories import EditImageRepository
from photo_editor.processing.filters import FilterDescriptor
from photo_editor.processing.scaling import PREVIEW_WIDTH, create_preview_image


LOGGER = logging.getLogger(__name__)

PreviewState = OperationState[RasterImage]
FilterListState = OperationState[List[FilterDescriptor]]
SaveState = OperationState[Path]


class PreviewPipeline:
    """Decode a source image into the preview shown on the edit screen."""

    def __init__(
        self,
        repository: EditImageRepository,
        commands: AsyncCommandController,
        *,
        empty_message: str,
    ) -> None:
        self._repository = repository
        self._commands = commands
        self._empty_message = empty_message
        self.state: ObservableSlot[PreviewState] = ObservableSlot("image_preview")

    def prepare_preview(self, source: Path | str) -> Optional[concurrent.futures.Future]:
        LOGGER.debug("Preparing preview for %s", source)
        return self._commands.run(
            lambda: self._repository.prepare_image_preview(source),
            self.state,
            empty_message=self._empty_message,
            description="prepare_preview",
        )


class FilterEnumerationPipeline:
    """List the filters available for an image, rendered on a small copy."""

    def __init__(
        self,
        repository: EditImageRepository,
        commands: AsyncCommandController,
        *,
        empty_message: str,
        preview_width: int = PREVIEW_WIDTH,
    ) -> None:
        self._repository = repository
        self._commands = commands
        self._empty_message = empty_message
        self._preview_width = preview_width
        self.state: ObservableSlot[FilterListState] = ObservableSlot("image_filters")

    def enumerate_filters(self, source_image: RasterImage) -> Optional[concurrent.futures.Future]:
        def _operation() -> Optional[List[FilterDescriptor]]:
            preview = create_preview_image(source_image, self._preview_width)
            return self._repository.get_image_filters(preview)

        return self._commands.run(
            _operation,
            self.state,
            empty_message=self._empty_message,
            description="enumerate_filters",
        )


class SavePipeline:
    """Persist a filtered image and report where it was stored."""

    def __init__(
        self,
        repository: EditImageRepository,
        commands: AsyncCommandController,
        *,
        empty_message: str,
    ) -> None:
        self._repository = repository
        self._commands = commands
        self._empty_message = empty_message
        self.state: ObservableSlot[SaveState] = ObservableSlot("save_filtered_image")

    def save_filtered(self, filtered_image: RasterImage) -> Optional[concurrent.futures.Future]:
        return self._commands.run(
            lambda: self._repository.save_filtered_image(filtered_image),
            self.state,
            empty_message=self._empty_message,
            description="save_filtered",
        )


class EditImageController:
    """Facade exposing the three edit pipelines and their state slots."""

    def __init__(
        self,
        repository: EditImageRepository,
        commands: AsyncCommandController,
        *,
        messages: Optional[ErrorMessages] = None,
        preview_width: int = PREVIEW_WIDTH,
    ) -> None:
        messages = messages or ErrorMessages()
        self.preview = PreviewPipeline(repository, commands, empty_message=messages.preview_unavailable)
        self.filters = FilterEnumerationPipeline(
            repository,
            commands,
            empty_message=messages.filters_unavailable,
            preview_width=preview_width,
        )
        self.saving = SavePipeline(repository, commands, empty_message=messages.save_failed)

    @classmethod
    def from_settings(
        cls,
        repository: EditImageRepository,
        commands: AsyncCommandController,
        settings: EditorSettings,
    ) -> "EditImageController":
        return cls(
            repository,
            commands,
            messages=settings.messages,
            preview_width=settings.preview_width,
        )

    # ------------------------------------------------------------------
    # State slots
    @property
    def image_preview_state(self) -> ObservableSlot[PreviewState]:
        return self.preview.state

    @property
    def image_filters_state(self) -> ObservableSlot[FilterListState]:
        return self.filters.state

    @property
    def save_filtered_image_state(self) -> ObservableSlot[SaveState]:
        return self.saving.state

    # ------------------------------------------------------------------
    # Entry points
    def prepare_image_preview(self, source: Path | str) -> Optional[concurrent.futures.Future]:
        return self.preview.prepare_preview(source)

    def load_image_filters(self, original_image: RasterImage) -> Optional[concurrent.futures.Future]:
        return self.filters.enumerate_filters(original_image)

    def save_filtered_image(self, filtered_image: RasterImage) -> Optional[concurrent.futures.Future]:
        return self.saving.save_filtered(filtered_image)


__all__ = [
    "EditImageController",
    "FilterEnumerationPipeline",
    "FilterListState",
    "PreviewPipeline",
    "PreviewState",
    "SavePipeline",
    "SaveState",
]
