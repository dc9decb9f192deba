"""
Pipeline functions for transcription-to-score rendering.

This module ties the stages together: loading a transcription from the
analysis service's JSON, planning the layout, painting it on a fresh
surface and encoding the result as PNG.
"""

import json
import logging

from pydantic import BaseModel, Field, ValidationError

from transcription_to_score.exceptions import EngravingError, ExportError, InputError
from transcription_to_score.export import export_png
from transcription_to_score.layout import plan, required_canvas_height
from transcription_to_score.models import (
    EngraverParameters,
    Glyph,
    ScoreHeader,
    StaffSystem,
    Transcription,
)
from transcription_to_score.rasterizer import compose, paint
from transcription_to_score.surface import RasterSurface

logger = logging.getLogger(__name__)

__all__ = [
    "EngravingError",
    "ExportError",
    "InputError",
    "RenderResult",
    "load_transcription",
    "render_transcription",
    "render_to_png",
]


class RenderResult(BaseModel):
    """Everything produced by one render.

    Attributes:
        systems: Layout plan.
        glyphs: Display list painted on the surface.
        surface: The freshly painted surface.
    """

    systems: list[StaffSystem] = Field(default_factory=list)
    glyphs: list[Glyph] = Field(default_factory=list)
    surface: RasterSurface

    class Config:
        arbitrary_types_allowed = True


def load_transcription(data: dict | str | bytes) -> Transcription:
    """Validate transcription data received from the analysis service.

    Args:
        data: Decoded JSON object, or the raw JSON text. The service's
            envelope objects are unwrapped.

    Returns:
        Validated Transcription.

    Raises:
        InputError: If the JSON is malformed or does not describe a
            transcription.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            logger.error(f"Malformed transcription JSON: {str(e)}")
            raise InputError(f"Malformed transcription JSON: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Transcription must be a JSON object, got {type(data).__name__}")
        raise InputError("Transcription must be a JSON object")

    try:
        return Transcription.from_payload(data)
    except ValidationError as e:
        logger.error(f"Invalid transcription: {str(e)}")
        raise InputError(f"Invalid transcription: {e}") from e


def render_transcription(
    transcription: Transcription, params: EngraverParameters | None = None
) -> RenderResult:
    """Lay out and paint a transcription on a new surface.

    Each call allocates its own surface, so concurrent callers never draw
    into the same buffer.

    Args:
        transcription: Score to render.
        params: Layout, style and export configuration.

    Returns:
        RenderResult with the plan, display list and painted surface.
    """
    params = params or EngraverParameters()
    layout = params.layout

    systems = plan(transcription, layout)
    header = ScoreHeader.from_transcription(transcription)

    height = layout.canvas_height
    if params.export.fit_height:
        height = max(height, int(round(required_canvas_height(systems, layout))))
    surface = RasterSurface(layout.canvas_width, height, params.style.background)

    glyphs = compose(systems, header, layout, params.style)
    paint(surface, glyphs, params.style)
    logger.info(
        f"Rendered {transcription.measure_count} measures on "
        f"{len(systems)} systems ({surface.width}x{surface.height})"
    )
    return RenderResult(systems=systems, glyphs=glyphs, surface=surface)


def render_to_png(
    transcription: Transcription, params: EngraverParameters | None = None
) -> bytes:
    """Render a transcription and return the PNG bytes."""
    return export_png(render_transcription(transcription, params).surface)
