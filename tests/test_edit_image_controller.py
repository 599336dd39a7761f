"""Tests for the edit screen pipelines."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import pytest

np = pytest.importorskip("numpy")
pytest.importorskip("cv2", reason="OpenCV is required for the filter catalogue")

from photo_editor.controllers import EditImageController, SavedImagesPipeline
from photo_editor.core.commands import AsyncCommandController
from photo_editor.core.config import EditorSettings, ErrorMessages
from photo_editor.core.state import OperationState
from photo_editor.data.image_io import RasterImage
from photo_editor.processing import scaling


MESSAGES = ErrorMessages(
    preview_unavailable="no preview",
    filters_unavailable="no filters",
    save_failed="not saved",
    saved_images_unavailable="no gallery",
)


def _image(width: int, height: int) -> RasterImage:
    return RasterImage(data=np.zeros((height, width, 3), dtype=np.uint8))


class FakeEditRepository:
    """Repository double recording calls and returning canned results."""

    def __init__(self) -> None:
        self.preview_result: Any = _image(40, 20)
        self.filters_result: Any = ["normal", "sepia"]
        self.save_result: Any = Path("/tmp/saved.png")
        self.preview_sources: List[Any] = []
        self.filter_inputs: List[RasterImage] = []
        self.saved_images: List[RasterImage] = []

    @staticmethod
    def _resolve(result: Any) -> Any:
        if isinstance(result, BaseException):
            raise result
        return result

    def prepare_image_preview(self, source):
        self.preview_sources.append(source)
        return self._resolve(self.preview_result)

    def get_image_filters(self, preview: RasterImage):
        self.filter_inputs.append(preview)
        return self._resolve(self.filters_result)

    def save_filtered_image(self, image: RasterImage) -> Optional[Path]:
        self.saved_images.append(image)
        return self._resolve(self.save_result)


@pytest.fixture
def repository() -> FakeEditRepository:
    return FakeEditRepository()


@pytest.fixture
def controller(repository, manual_executor) -> EditImageController:
    return EditImageController(repository, AsyncCommandController(manual_executor), messages=MESSAGES)


def test_slots_start_idle(controller, recorder) -> None:
    for slot in (
        controller.image_preview_state,
        controller.image_filters_state,
        controller.save_filtered_image_state,
    ):
        slot.subscribe(recorder)

    assert recorder.states == []


def test_prepare_preview_success(controller, repository, manual_executor, recorder) -> None:
    controller.image_preview_state.subscribe(recorder)

    controller.prepare_image_preview("content://image/1")
    assert recorder.states == [OperationState.in_progress()]
    assert repository.preview_sources == []

    manual_executor.run(0)

    assert repository.preview_sources == ["content://image/1"]
    assert recorder.last.value is repository.preview_result


def test_prepare_preview_absent_uses_fixed_message(controller, repository, manual_executor) -> None:
    repository.preview_result = None

    controller.prepare_image_preview("content://image/2")
    manual_executor.run(0)

    assert controller.image_preview_state.value == OperationState.failure("no preview")


def test_prepare_preview_raised_failure_uses_exception_text(controller, repository, manual_executor) -> None:
    repository.preview_result = FileNotFoundError("missing.png")

    controller.prepare_image_preview("missing.png")
    manual_executor.run(0)

    assert controller.image_preview_state.value == OperationState.failure("missing.png")


def test_enumerate_filters_downscales_before_listing(controller, repository, manual_executor) -> None:
    source = _image(1000, 500)

    controller.load_image_filters(source)
    manual_executor.run(0)

    listed_on = repository.filter_inputs[0]
    assert listed_on.size == (150, 75)
    assert source.size == (1000, 500)
    assert controller.image_filters_state.value == OperationState.success(["normal", "sepia"])


def test_enumerate_filters_falls_back_when_scaling_fails(
    controller, repository, manual_executor, monkeypatch
) -> None:
    def _broken(*_args, **_kwargs):
        raise MemoryError("no room for preview")

    monkeypatch.setattr(scaling, "scale_image", _broken)
    source = _image(1000, 500)

    controller.load_image_filters(source)
    manual_executor.run(0)

    assert repository.filter_inputs == [source]
    assert controller.image_filters_state.value.succeeded


def test_enumerate_filters_zero_width_source_passes_through(controller, repository, manual_executor) -> None:
    source = RasterImage(data=np.zeros((10, 0, 3), dtype=np.uint8))

    controller.load_image_filters(source)
    manual_executor.run(0)

    assert repository.filter_inputs == [source]
    assert controller.image_filters_state.value.error is None


def test_enumerate_filters_absent_uses_fixed_message(controller, repository, manual_executor) -> None:
    repository.filters_result = None

    controller.load_image_filters(_image(300, 300))
    manual_executor.run(0)

    assert controller.image_filters_state.value == OperationState.failure("no filters")


def test_enumerate_filters_empty_list_is_success(controller, repository, manual_executor) -> None:
    repository.filters_result = []

    controller.load_image_filters(_image(300, 300))
    manual_executor.run(0)

    assert controller.image_filters_state.value == OperationState(value=[])


def test_enumerate_filters_raised_failure(controller, repository, manual_executor) -> None:
    repository.filters_result = RuntimeError("filter engine crashed")

    controller.load_image_filters(_image(300, 300))
    manual_executor.run(0)

    assert controller.image_filters_state.value == OperationState.failure("filter engine crashed")


def test_save_filtered_success(controller, repository, manual_executor, recorder) -> None:
    controller.save_filtered_image_state.subscribe(recorder)
    image = _image(10, 10)

    controller.save_filtered_image(image)
    manual_executor.run(0)

    assert repository.saved_images == [image]
    assert [state.loading for state in recorder.states] == [True, False]
    assert recorder.last == OperationState.success(Path("/tmp/saved.png"))


def test_save_filtered_absent_uses_fixed_message(controller, repository, manual_executor) -> None:
    repository.save_result = None

    controller.save_filtered_image(_image(10, 10))
    manual_executor.run(0)

    assert controller.save_filtered_image_state.value == OperationState.failure("not saved")


def test_save_filtered_raised_failure(controller, repository, manual_executor) -> None:
    repository.save_result = PermissionError("read-only gallery")

    controller.save_filtered_image(_image(10, 10))
    manual_executor.run(0)

    assert controller.save_filtered_image_state.value == OperationState.failure("read-only gallery")


def test_pipelines_publish_independently(controller, manual_executor) -> None:
    controller.prepare_image_preview("a")
    controller.save_filtered_image(_image(4, 4))

    manual_executor.run(1)

    assert controller.image_preview_state.value.loading
    assert controller.save_filtered_image_state.value.succeeded
    assert controller.image_filters_state.is_idle


def test_second_invocation_goes_back_to_loading(controller, repository, manual_executor, recorder) -> None:
    controller.image_preview_state.subscribe(recorder)
    repository.preview_result = None
    controller.prepare_image_preview("first")
    manual_executor.run(0)

    repository.preview_result = _image(2, 2)
    controller.prepare_image_preview("second")
    assert controller.image_preview_state.value.loading
    manual_executor.run(1)

    assert [state.loading for state in recorder.states] == [True, False, True, False]
    assert recorder.states[1].error == "no preview"
    assert recorder.last.succeeded


def test_overlapping_previews_last_completion_wins(controller, repository, manual_executor) -> None:
    first, second = _image(1, 1), _image(2, 2)
    results = {"first": first, "second": second}
    repository.prepare_image_preview = lambda source: results[source]

    controller.prepare_image_preview("first")
    controller.prepare_image_preview("second")
    manual_executor.run(1)
    manual_executor.run(0)

    # The older request completed last, so its result is what remains.
    assert controller.image_preview_state.value.value is first


def test_from_settings_uses_configured_width_and_messages(repository, manual_executor) -> None:
    settings = EditorSettings(preview_width=50, messages=MESSAGES)
    controller = EditImageController.from_settings(
        repository, AsyncCommandController(manual_executor), settings
    )

    controller.load_image_filters(_image(200, 100))
    manual_executor.run(0)

    assert repository.filter_inputs[0].size == (50, 25)


def test_default_messages_are_used_without_overrides(repository, manual_executor) -> None:
    controller = EditImageController(repository, AsyncCommandController(manual_executor))
    repository.preview_result = None

    controller.prepare_image_preview("x")
    manual_executor.run(0)

    assert controller.image_preview_state.value.error == "cannot prepare image preview"


class FakeSavedRepository:
    def __init__(self, result: Any) -> None:
        self.result = result

    def load_saved_images(self):
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def test_saved_images_pipeline_states(manual_executor, recorder) -> None:
    entries = [(Path("a.png"), _image(3, 3))]
    pipeline = SavedImagesPipeline(
        FakeSavedRepository(entries), AsyncCommandController(manual_executor), messages=MESSAGES
    )
    pipeline.state.subscribe(recorder)

    pipeline.load_saved_images()
    manual_executor.run(0)

    assert recorder.states[0].loading
    assert recorder.last.value is entries


def test_saved_images_pipeline_absent(manual_executor) -> None:
    pipeline = SavedImagesPipeline(
        FakeSavedRepository(None), AsyncCommandController(manual_executor), messages=MESSAGES
    )

    pipeline.load_saved_images()
    manual_executor.run(0)

    assert pipeline.state.value == OperationState.failure("no gallery")
