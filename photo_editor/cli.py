"""Command line front-end driving the editor controllers without a GUI."""

from __future__ import annotations

import argparse
import concurrent.futures
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from photo_editor.controllers import EditImageController, SavedImagesPipeline
from photo_editor.core import (
    AsyncCommandController,
    EditorSettings,
    LoggingConfigurator,
    LoggingOptions,
    ObservableSlot,
    OperationState,
    SettingsManager,
    ThreadController,
)
from photo_editor.core.errors import FilterNotFoundError
from photo_editor.data import LocalEditImageRepository, LocalSavedImageRepository
from photo_editor.processing import FilterCatalog


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-editor",
        description="Preview an image, apply one of the built-in filters and save the result.",
    )
    parser.add_argument("source", nargs="?", help="Image file to edit")
    parser.add_argument("-f", "--filter", default="normal", help="Filter identifier to apply (default: normal)")
    parser.add_argument("-o", "--output", type=Path, help="Directory receiving saved images")
    parser.add_argument("--settings", type=Path, help="INI file holding editor settings")
    parser.add_argument("--list-filters", action="store_true", help="List the filters available for SOURCE and exit")
    parser.add_argument("--gallery", action="store_true", help="List previously saved images and exit")
    parser.add_argument("--log-dir", type=Path, help="Also write a rotating log file into this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _describe(state: OperationState[Any]) -> str:
    if state.loading:
        return "loading"
    if state.error is not None:
        return f"error: {state.error}"
    value = state.value
    if isinstance(value, list):
        return f"ready ({len(value)} items)"
    size = getattr(value, "size", None)
    if isinstance(size, tuple):
        return f"ready ({size[0]}x{size[1]})"
    return f"ready ({value})"


def _echo_states(slot: ObservableSlot) -> None:
    slot.subscribe(lambda state: print(f"[{slot.name}] {_describe(state)}"))


def _settle(slot: ObservableSlot, future: Optional[concurrent.futures.Future]) -> OperationState[Any]:
    """Block until the operation tracked by ``future`` has published."""

    if future is not None:
        future.result()
    return slot.value


def run(args: argparse.Namespace) -> int:
    manager = SettingsManager(path=args.settings) if args.settings else SettingsManager()
    settings = EditorSettings.from_manager(manager)
    output_directory = args.output or settings.output_directory
    LOGGER.debug("Saving into %s (preview width %s)", output_directory, settings.preview_width)

    with ThreadController(max_workers=settings.max_workers) as threads:
        commands = AsyncCommandController(threads)

        if args.gallery:
            gallery = SavedImagesPipeline(LocalSavedImageRepository(output_directory), commands, messages=settings.messages)
            _echo_states(gallery.state)
            state = _settle(gallery.state, gallery.load_saved_images())
            if state.error is not None:
                return 1
            for path, image in state.value:
                print(f"{path}\t{image.width}x{image.height}")
            return 0

        if not args.source:
            print("photo-editor: SOURCE is required unless --gallery is given", file=sys.stderr)
            return 2

        catalog = FilterCatalog()
        repository = LocalEditImageRepository(output_directory, catalog)
        controller = EditImageController.from_settings(repository, commands, settings)
        for slot in (
            controller.image_preview_state,
            controller.image_filters_state,
            controller.save_filtered_image_state,
        ):
            _echo_states(slot)

        preview = _settle(controller.image_preview_state, controller.prepare_image_preview(args.source))
        if preview.error is not None:
            return 1

        filters = _settle(controller.image_filters_state, controller.load_image_filters(preview.value))
        if filters.error is not None:
            return 1
        if args.list_filters:
            for descriptor in filters.value:
                print(f"{descriptor.identifier}\t{descriptor.title}")
            return 0

        try:
            chosen = catalog.get(args.filter)
        except FilterNotFoundError as exc:
            print(f"photo-editor: {exc}; available: {', '.join(catalog.identifiers())}", file=sys.stderr)
            return 2

        saved = _settle(controller.save_filtered_image_state, controller.save_filtered_image(chosen.apply(preview.value)))
        return 1 if saved.error is not None else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    LoggingConfigurator(
        LoggingOptions(
            log_directory=args.log_dir,
            enable_file=args.log_dir is not None,
            level=logging.WARNING,
            developer_diagnostics=args.verbose,
        )
    ).configure()
    return run(args)


__all__ = ["build_parser", "main", "run"]


if __name__ == "__main__":
    raise SystemExit(main())
