"""PNG export of a painted drawing surface.

Encoding uses OpenCV's lossless PNG writer. ``save_png`` writes the image
for download under a fixed default filename, replacing any previous export
atomically so a reader never sees a partially written file.
"""

import logging
import os
from pathlib import Path

import cv2

from transcription_to_score.exceptions import ExportError
from transcription_to_score.surface import DrawingSurface

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "piano-sheet-music.png"


def export_png(surface: DrawingSurface) -> bytes:
    """Encode the current surface contents as PNG bytes.

    Args:
        surface: Painted surface.

    Returns:
        PNG file contents.

    Raises:
        ExportError: If the encoder rejects the image.
    """
    rgb = surface.to_image()
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    if not ok:
        logger.error(f"PNG encoding failed for {surface.width}x{surface.height} surface")
        raise ExportError("Could not encode surface as PNG")
    return buffer.tobytes()


def save_png(
    surface: DrawingSurface,
    directory: str | os.PathLike,
    filename: str = DEFAULT_EXPORT_FILENAME,
) -> Path:
    """Write the surface as a PNG file, overwriting a previous export.

    Args:
        surface: Painted surface.
        directory: Destination directory; created if missing.
        filename: File name inside ``directory``.

    Returns:
        Path of the written file.

    Raises:
        ExportError: If encoding or writing fails.
    """
    content = export_png(surface)
    target_dir = Path(directory)
    target = target_dir / filename
    temp_path = target.with_name(target.name + ".tmp")
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        with open(temp_path, "wb") as f:
            f.write(content)
        os.replace(temp_path, target)
    except OSError as e:
        logger.error(f"Error writing {target}: {str(e)}")
        raise ExportError(f"Could not write {target}") from e

    logger.info(f"Exported score to {target}")
    return target
