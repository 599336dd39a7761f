"""End-to-end tests for the ``photo-editor`` command line."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

np = pytest.importorskip("numpy")
PIL_Image = pytest.importorskip("PIL.Image", reason="Pillow is required for image tests")
pytest.importorskip("cv2", reason="OpenCV is required for the filter catalogue")
pytest.importorskip("PyQt5.QtCore", reason="PyQt5 is required for QSettings")

from photo_editor import cli


@pytest.fixture(autouse=True)
def _restore_editor_logger():
    logger = logging.getLogger("photo_editor")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "photo.png"
    array = np.zeros((50, 100, 3), dtype=np.uint8)
    array[:, :50] = (200, 100, 50)
    PIL_Image.fromarray(array).save(path)
    return path


def _args(tmp_path: Path, *extra: str) -> list:
    return ["--settings", str(tmp_path / "editor.ini"), "--output", str(tmp_path / "out"), *extra]


def test_apply_filter_and_save(tmp_path: Path, source: Path, capsys) -> None:
    exit_code = cli.main(_args(tmp_path, str(source), "--filter", "invert"))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[image_preview] loading" in out
    assert "[image_preview] ready (100x50)" in out
    assert "[image_filters] ready (12 items)" in out
    saved = list((tmp_path / "out").glob("IMG_*.png"))
    assert len(saved) == 1
    with PIL_Image.open(saved[0]) as reopened:
        assert reopened.size == (100, 50)
        assert reopened.getpixel((0, 0)) == (55, 155, 205)


def test_list_filters(tmp_path: Path, source: Path, capsys) -> None:
    exit_code = cli.main(_args(tmp_path, str(source), "--list-filters"))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "sepia\tSepia" in out
    assert not (tmp_path / "out").exists()


def test_undecodable_source_reports_error(tmp_path: Path, capsys) -> None:
    bogus = tmp_path / "bogus.png"
    bogus.write_text("nope", encoding="utf-8")

    exit_code = cli.main(_args(tmp_path, str(bogus)))

    assert exit_code == 1
    assert "[image_preview] error: cannot prepare image preview" in capsys.readouterr().out


def test_missing_source_reports_raised_failure(tmp_path: Path, capsys) -> None:
    exit_code = cli.main(_args(tmp_path, str(tmp_path / "gone.png")))

    assert exit_code == 1
    assert "gone.png" in capsys.readouterr().out


def test_unknown_filter(tmp_path: Path, source: Path, capsys) -> None:
    exit_code = cli.main(_args(tmp_path, str(source), "--filter", "vintage"))

    assert exit_code == 2
    assert "Unknown filter 'vintage'" in capsys.readouterr().err


def test_gallery_lists_saved_images(tmp_path: Path, source: Path, capsys) -> None:
    assert cli.main(_args(tmp_path, str(source))) == 0
    capsys.readouterr()

    exit_code = cli.main(_args(tmp_path, "--gallery"))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "[saved_images] ready (1 items)" in out
    assert "100x50" in out


def test_gallery_without_directory_fails(tmp_path: Path, capsys) -> None:
    exit_code = cli.main(_args(tmp_path, "--gallery"))

    assert exit_code == 1
    assert "cannot load saved images" in capsys.readouterr().out


def test_source_is_required(tmp_path: Path, capsys) -> None:
    assert cli.main(_args(tmp_path)) == 2
