"""Core domain models for transcription-to-score rendering."""

from enum import Enum

from pydantic import BaseModel, Field


DEFAULT_TITLE = "Piano Transcription"


class MusicalDuration(str, Enum):
    """Rhythmic value class of a note."""

    WHOLE = "whole"
    HALF = "half"
    QUARTER = "quarter"
    EIGHTH = "eighth"
    SIXTEENTH = "sixteenth"

    @property
    def beats(self) -> float:
        """Length of the duration in quarter-note beats."""
        return {
            MusicalDuration.WHOLE: 4.0,
            MusicalDuration.HALF: 2.0,
            MusicalDuration.QUARTER: 1.0,
            MusicalDuration.EIGHTH: 0.5,
            MusicalDuration.SIXTEENTH: 0.25,
        }[self]


class Note(BaseModel):
    """A single pitched note as produced by the transcription service.

    Attributes:
        pitch: Pitch name such as "C#5" (letter, optional accidental, octave).
        musical_duration: Rhythmic value of the note.
        time: Onset in seconds; used for labeling only, never for spacing.
    """

    pitch: str = Field(..., alias="note", description="Pitch name, e.g. 'C#5'")
    musical_duration: MusicalDuration = Field(
        ..., alias="musicalDuration", description="Rhythmic value"
    )
    time: float = Field(0.0, description="Onset time in seconds")

    class Config:
        populate_by_name = True
        frozen = True


class Measure(BaseModel):
    """An ordered group of notes; may be empty."""

    notes: list[Note] = Field(
        default_factory=list, description="Notes ordered by onset time"
    )

    class Config:
        frozen = True


class Transcription(BaseModel):
    """Structured transcription consumed by the layout planner.

    Attributes:
        title: Optional score title.
        tempo: Tempo in beats per minute.
        key: Key label, displayed verbatim.
        time_signature: Meter formatted as "N/D".
        measures: Ordered measures of the score.
    """

    title: str | None = Field(None, description="Score title")
    tempo: int = Field(120, ge=1, description="Tempo in beats per minute")
    key: str = Field("C major", description="Key label for display")
    time_signature: str = Field(
        "4/4",
        alias="timeSignature",
        pattern=r"^\s*\d+\s*/\s*\d+\s*$",
        description="Time signature formatted as N/D",
    )
    measures: list[Measure] = Field(
        default_factory=list, description="Ordered measures"
    )

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def measure_count(self) -> int:
        return len(self.measures)

    @property
    def notes(self) -> list[Note]:
        """All notes flattened in measure order."""
        return [note for measure in self.measures for note in measure.notes]

    @classmethod
    def from_payload(cls, data: dict) -> "Transcription":
        """Build a Transcription from a service response.

        Accepts either the bare transcription object or the envelope the
        transcription service wraps it in (``transcription_data`` for saved
        items, ``transcription`` for fresh results). The envelope's title is
        used when the inner object carries none.

        Args:
            data: Decoded JSON object.

        Returns:
            Validated Transcription.
        """
        for envelope_key in ("transcription_data", "transcription"):
            inner = data.get(envelope_key)
            if isinstance(inner, dict):
                payload = dict(inner)
                if not payload.get("title") and data.get("title"):
                    payload["title"] = data["title"]
                return cls.model_validate(payload)
        return cls.model_validate(data)


class ScoreHeader(BaseModel):
    """Header text drawn once at the top of the score."""

    title: str = Field(DEFAULT_TITLE, description="Displayed title")
    tempo: int = Field(120, ge=1, description="Tempo in beats per minute")
    key: str = Field("", description="Key label")
    time_signature: str = Field("4/4", description="Time signature N/D")

    @classmethod
    def from_transcription(cls, transcription: Transcription) -> "ScoreHeader":
        title = (transcription.title or "").strip() or DEFAULT_TITLE
        return cls(
            title=title,
            tempo=transcription.tempo,
            key=transcription.key,
            time_signature=transcription.time_signature,
        )

    @property
    def time_signature_parts(self) -> tuple[str, str]:
        """Numerator and denominator as display strings."""
        numerator, _, denominator = self.time_signature.partition("/")
        return numerator.strip(), denominator.strip()
