"""
Note listings and onset timeline for a transcription.

Companion views shown next to the rendered score: a short list of detected
notes with their onset times, and a matplotlib chart placing every note on
a pitch/time grid.
"""

import math
from collections.abc import Sequence

from matplotlib.figure import Figure
from pydantic import BaseModel, Field

from transcription_to_score.models import MusicalDuration, Note, Transcription
from transcription_to_score.pitch import (
    DEFAULT_STAFF_POSITION,
    PITCH_POSITIONS,
    staff_position,
    strip_accidental,
)

DEFAULT_BADGE_LIMIT = 20

_DURATION_COLORS = {
    MusicalDuration.WHOLE: "#1f77b4",
    MusicalDuration.HALF: "#2ca02c",
    MusicalDuration.QUARTER: "#ff7f0e",
    MusicalDuration.EIGHTH: "#d62728",
    MusicalDuration.SIXTEENTH: "#9467bd",
}


class NoteBadge(BaseModel):
    """One entry of the detected-notes list."""

    pitch: str
    duration: MusicalDuration
    time_label: str = Field("0:00", description="Onset formatted as m:ss")


class NoteSummary(BaseModel):
    """Truncated listing of a transcription's notes.

    Attributes:
        total: Number of notes in the transcription.
        badges: The first ``limit`` notes.
        overflow: How many notes were left out of ``badges``.
    """

    total: int = Field(0, ge=0)
    badges: list[NoteBadge] = Field(default_factory=list)
    overflow: int = Field(0, ge=0)


def format_time(seconds: float) -> str:
    """Format seconds as ``m:ss``; NaN and negative values give ``0:00``."""
    if seconds is None or math.isnan(seconds) or seconds < 0:
        return "0:00"
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


def summarize_notes(
    transcription: Transcription, limit: int = DEFAULT_BADGE_LIMIT
) -> NoteSummary:
    """List the first ``limit`` notes and count the rest."""
    notes = transcription.notes
    shown = notes[: max(limit, 0)]
    return NoteSummary(
        total=len(notes),
        badges=[
            NoteBadge(
                pitch=n.pitch,
                duration=n.musical_duration,
                time_label=format_time(n.time),
            )
            for n in shown
        ],
        overflow=len(notes) - len(shown),
    )


def _pitch_label(position: int) -> str:
    for name, pos in PITCH_POSITIONS:
        if pos == position:
            return name
    return ""


def create_onset_timeline(
    transcription: Transcription,
    *,
    width_px: int = 1000,
    row_h_in: float = 0.25,
    max_h_in: float = 8.0,
    min_h_in: float = 2.0,
    dpi: int = 100,
) -> Figure:
    """Chart every note by onset time and staff pitch.

    Each note is a horizontal bar starting at its onset, as long as its
    duration at the transcription's tempo, on the row of its staff
    position (accidentals share a row with their natural). Bars are colored
    by duration.

    Args:
        transcription: Source transcription.
        width_px: Figure width in pixels.
        row_h_in: Height per pitch row in inches.
        max_h_in: Maximum figure height in inches.
        min_h_in: Minimum figure height in inches.
        dpi: Figure resolution.

    Returns:
        Matplotlib Figure. A transcription without notes gives a figure
        showing "No notes".
    """
    notes: Sequence[Note] = transcription.notes

    # ---------- empty case ----------
    if not notes:
        fig = Figure(figsize=(width_px / dpi, min_h_in), dpi=dpi)
        ax = fig.add_subplot()
        ax.text(0.5, 0.5, "No notes", ha="center", va="center", transform=ax.transAxes)
        ax.axis("off")
        return fig

    # Rows run top to bottom like the staff: higher pitches first.
    positions = [staff_position(n.pitch) for n in notes]
    lo_pos, hi_pos = min(positions), max(positions)
    rows = hi_pos - lo_pos + 1

    beat_seconds = 60.0 / transcription.tempo
    height_in = max(min_h_in, min(max_h_in, rows * row_h_in))
    fig = Figure(figsize=(width_px / dpi, height_in), dpi=dpi)
    ax = fig.add_subplot()

    end = 0.0
    for note, pos in zip(notes, positions):
        length = note.musical_duration.beats * beat_seconds
        end = max(end, note.time + length)
        ax.barh(
            pos,
            length,
            left=note.time,
            height=0.8,
            color=_DURATION_COLORS[note.musical_duration],
            edgecolor="black",
            linewidth=0.6,
        )

    ax.set_xlim(min(0.0, min(n.time for n in notes)), end)
    ax.set_ylim(hi_pos + 0.5, lo_pos - 0.5)

    ticks = list(range(lo_pos, hi_pos + 1))
    ax.set_yticks(ticks)
    ax.set_yticklabels([_pitch_label(p) for p in ticks], fontsize=7)

    # Notes that fell back to the default position keep their own label.
    for note, pos in zip(notes, positions):
        if pos == DEFAULT_STAFF_POSITION and strip_accidental(note.pitch) != "C5":
            ax.annotate(note.pitch, (note.time, pos), fontsize=6, va="center")

    ax.set_xlabel("Time (s)", fontsize=9)
    ax.set_ylabel("Pitch", fontsize=9)
    for spine_name, spine in ax.spines.items():
        if spine_name not in ("left", "bottom"):
            spine.set_visible(False)

    ax.set_facecolor("white")
    fig.tight_layout()
    return fig
