"""Models for the rasterizer's display list.

The rasterizer first turns a layout plan into an ordered list of glyphs and
only then paints them onto a surface. Each glyph model describes one visible
element in canvas coordinates, so the drawing order and the presence of
clefs, time signatures and bar lines can be checked without rendering.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Background(BaseModel):
    """Full-surface background fill."""

    kind: Literal["background"] = "background"
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    system: int | None = None


class TextGlyph(BaseModel):
    """A line of text anchored at its baseline."""

    kind: Literal["text"] = "text"
    x: float
    y: float
    text: str
    size: int = Field(16, ge=1)
    bold: bool = False
    align: Literal["left", "center", "right"] = "left"
    system: int | None = None


class StaffLine(BaseModel):
    kind: Literal["staff_line"] = "staff_line"
    x1: float
    x2: float
    y: float
    system: int | None = None


class Clef(BaseModel):
    """Treble clef; ``y`` is the G line it curls around."""

    kind: Literal["clef"] = "clef"
    x: float
    y: float
    line_spacing: float = Field(..., gt=0)
    system: int | None = None


class TimeSignature(BaseModel):
    kind: Literal["time_signature"] = "time_signature"
    x: float
    staff_top: float
    numerator: str
    denominator: str
    line_spacing: float = Field(..., gt=0)
    system: int | None = None


class LedgerLine(BaseModel):
    kind: Literal["ledger_line"] = "ledger_line"
    x1: float
    x2: float
    y: float
    staff_position: int
    system: int | None = None


class Notehead(BaseModel):
    kind: Literal["notehead"] = "notehead"
    x: float
    y: float
    hollow: bool = False
    system: int | None = None


class Stem(BaseModel):
    """Upward stem from ``y_bottom`` (the notehead) to ``y_top``."""

    kind: Literal["stem"] = "stem"
    x: float
    y_bottom: float
    y_top: float
    system: int | None = None


class Flag(BaseModel):
    """Curved hook hanging down and to the right from (x, y)."""

    kind: Literal["flag"] = "flag"
    x: float
    y: float
    system: int | None = None


class BarLine(BaseModel):
    kind: Literal["bar_line"] = "bar_line"
    x: float
    top: float
    bottom: float
    system: int | None = None


class DoubleBarLine(BaseModel):
    """Closing thin-thick bar line; ``x`` is the thick line."""

    kind: Literal["double_bar_line"] = "double_bar_line"
    x: float
    top: float
    bottom: float
    system: int | None = None


Glyph = Annotated[
    Union[
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
    ],
    Field(discriminator="kind"),
]
