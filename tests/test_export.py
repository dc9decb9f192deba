import cv2
import numpy as np
import pytest

from transcription_to_score.exceptions import ExportError
from transcription_to_score.export import (
    DEFAULT_EXPORT_FILENAME,
    export_png,
    save_png,
)
from transcription_to_score.surface import RasterSurface

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def painted_surface():
    s = RasterSurface(40, 20)
    s.ellipse(10, 10, 5, 4, filled=True, color=(200, 30, 10))
    return s


def test_export_png_signature(painted_surface):
    data = export_png(painted_surface)
    assert data.startswith(PNG_SIGNATURE)


def test_export_png_is_lossless(painted_surface):
    data = export_png(painted_surface)
    bgr = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_COLOR)
    rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
    assert np.array_equal(rgb, painted_surface.to_image())


def test_export_png_deterministic(painted_surface):
    assert export_png(painted_surface) == export_png(painted_surface)


def test_save_png_default_filename(painted_surface, tmp_path):
    path = save_png(painted_surface, tmp_path)
    assert path.name == DEFAULT_EXPORT_FILENAME == "piano-sheet-music.png"
    assert path.read_bytes().startswith(PNG_SIGNATURE)
    assert not (tmp_path / (DEFAULT_EXPORT_FILENAME + ".tmp")).exists()


def test_save_png_overwrites(painted_surface, tmp_path):
    save_png(RasterSurface(5, 5), tmp_path, "score.png")
    path = save_png(painted_surface, tmp_path, "score.png")
    decoded = cv2.imdecode(np.frombuffer(path.read_bytes(), np.uint8), cv2.IMREAD_COLOR)
    assert decoded.shape == (20, 40, 3)


def test_save_png_unwritable_target(painted_surface, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(ExportError):
        save_png(painted_surface, blocker)
