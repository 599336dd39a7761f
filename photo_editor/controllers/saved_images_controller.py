"""Controller for the saved images gallery."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import List, Optional

from photo_editor.core.commands import AsyncCommandController
from photo_editor.core.config import ErrorMessages
from photo_editor.core.state import ObservableSlot, OperationState
from photo_editor.data.repositories import SavedImage, SavedImageRepository


LOGGER = logging.getLogger(__name__)

SavedImagesState = OperationState[List[SavedImage]]


class SavedImagesPipeline:
    """Load previously saved images into a :data:`SavedImagesState` slot."""

    def __init__(
        self,
        repository: SavedImageRepository,
        commands: AsyncCommandController,
        *,
        messages: Optional[ErrorMessages] = None,
    ) -> None:
        self._repository = repository
        self._commands = commands
        self._empty_message = (messages or ErrorMessages()).saved_images_unavailable
        self.state: ObservableSlot[SavedImagesState] = ObservableSlot("saved_images")

    def load_saved_images(self) -> Optional[concurrent.futures.Future]:
        LOGGER.debug("Loading saved images")
        return self._commands.run(
            self._repository.load_saved_images,
            self.state,
            empty_message=self._empty_message,
            description="load_saved_images",
        )


__all__ = ["SavedImagesPipeline", "SavedImagesState"]
