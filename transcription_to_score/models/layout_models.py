"""Models for the geometric plan produced by the layout planner.

A plan is a list of StaffSystem objects. Each system holds the measures
placed on it, and each measure holds the horizontal position and staff
position of its notes. The plan carries no drawing state and can be
inspected in tests without a graphics backend.
"""

from pydantic import BaseModel, Field

from transcription_to_score.models.core_models import MusicalDuration


class NoteLayout(BaseModel):
    """Placement of one note inside a measure.

    Attributes:
        x: Horizontal center of the notehead in canvas units.
        staff_position: Signed half-line step; 0 is the top staff line,
            8 the bottom one, negative values lie above the staff.
        duration: Rhythmic value copied from the source note.
        pitch: Source pitch name, kept for labeling.
    """

    x: float = Field(..., description="Notehead center x")
    staff_position: int = Field(..., description="Half-line step from top line")
    duration: MusicalDuration = Field(..., description="Rhythmic value")
    pitch: str = Field("", description="Source pitch name")


class MeasureLayout(BaseModel):
    """Placement of one measure on its staff system.

    Attributes:
        index: Position of the measure in the whole transcription.
        horizontal_offset: Left edge of the measure.
        width: Measure width; equal for every measure of a system.
        note_layouts: Placed notes in onset order.
    """

    index: int = Field(..., ge=0, description="Global measure number")
    horizontal_offset: float = Field(..., description="Left edge x")
    width: float = Field(..., gt=0, description="Measure width")
    note_layouts: list[NoteLayout] = Field(
        default_factory=list, description="Placed notes"
    )

    @property
    def right_edge(self) -> float:
        return self.horizontal_offset + self.width


class StaffSystem(BaseModel):
    """One five-line staff and the measures drawn on it.

    Attributes:
        index: Zero-based system number.
        vertical_offset: y of the top staff line.
        measures: Measures placed on this system.
        is_first: True for the system carrying the time signature.
        is_last: True for the system closed with a double bar line.
        leading_reserved_width: Space left of the first measure for the
            clef and, on the first system, the time signature.
    """

    index: int = Field(..., ge=0, description="System number")
    vertical_offset: float = Field(..., description="Top staff line y")
    measures: list[MeasureLayout] = Field(
        default_factory=list, description="Measures on this system"
    )
    is_first: bool = Field(False, description="First system of the score")
    is_last: bool = Field(False, description="Last system of the score")
    leading_reserved_width: float = Field(
        0.0, ge=0.0, description="Clef and time signature space"
    )
