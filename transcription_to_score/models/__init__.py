"""Domain models for the transcription-to-score engine.

This module provides a centralized location for all data models used by the
notation engine. It includes:

- Core domain models (Transcription, Measure, Note, ScoreHeader)
- Layout plan models (StaffSystem, MeasureLayout, NoteLayout)
- Configuration parameters for layout, rendering and export
- Glyph models forming the rasterizer's display list

All models are built using Pydantic for data validation and serialization,
ensuring type safety and clear interfaces between the planner and the
rasterizer.
"""

# Re-export core models
from transcription_to_score.models.core_models import (
    DEFAULT_TITLE,
    MusicalDuration,
    Note,
    Measure,
    Transcription,
    ScoreHeader,
)

# Re-export layout models
from transcription_to_score.models.layout_models import (
    NoteLayout,
    MeasureLayout,
    StaffSystem,
)

# Re-export setting models
from transcription_to_score.models.settings_models import (
    LayoutConstraints,
    RenderStyle,
    ExportParams,
    EngraverParameters,
)

# Re-export glyph models
from transcription_to_score.models.glyph_models import (
    Glyph,
    Background,
    TextGlyph,
    StaffLine,
    Clef,
    TimeSignature,
    LedgerLine,
    Notehead,
    Stem,
    Flag,
    BarLine,
    DoubleBarLine,
)
