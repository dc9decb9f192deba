"""Rasterizer: paints a layout plan onto a drawing surface.

Rendering happens in two steps. ``compose`` turns the staff systems and the
score header into an ordered list of glyph models, and ``paint`` walks that
list issuing primitive calls on a ``DrawingSurface``. ``render`` runs both.
Neither step depends on a concrete graphics backend.
"""

import logging
from collections.abc import Callable, Sequence

from transcription_to_score.models import (
    Background,
    BarLine,
    Clef,
    DoubleBarLine,
    Flag,
    Glyph,
    LayoutConstraints,
    LedgerLine,
    MusicalDuration,
    NoteLayout,
    Notehead,
    RenderStyle,
    ScoreHeader,
    StaffLine,
    StaffSystem,
    Stem,
    TextGlyph,
    TimeSignature,
)
from transcription_to_score.pitch import ledger_line_positions, staff_y
from transcription_to_score.surface import DrawingSurface

logger = logging.getLogger(__name__)

STAFF_LINE_COUNT = 5

# G line, counted in half-line steps from the top line.
_CLEF_ANCHOR_POSITION = 6

_HOLLOW_DURATIONS = {MusicalDuration.WHOLE, MusicalDuration.HALF}
_FLAG_COUNTS = {
    MusicalDuration.EIGHTH: 1,
    MusicalDuration.SIXTEENTH: 2,
}


# ---------- composition ----------
def compose_header(
    header: ScoreHeader, constraints: LayoutConstraints, style: RenderStyle
) -> list[Glyph]:
    """Title, tempo mark, key and time signature drawn above the first staff."""
    left = style.header_margin
    right = constraints.canvas_width - style.header_margin
    baseline = style.header_baseline

    # Small quarter note standing in for the metronome mark.
    icon_x = left + style.notehead_rx + 1
    icon_y = baseline - style.notehead_ry
    return [
        TextGlyph(
            x=constraints.canvas_width / 2,
            y=style.title_baseline,
            text=header.title,
            size=style.title_size,
            bold=True,
            align="center",
        ),
        Notehead(x=icon_x, y=icon_y),
        Stem(
            x=icon_x + style.notehead_rx,
            y_bottom=icon_y,
            y_top=icon_y - style.text_size + 2,
        ),
        TextGlyph(
            x=icon_x + 2 * style.notehead_rx + 1,
            y=baseline,
            text=f"= {header.tempo}",
            size=style.text_size,
        ),
        TextGlyph(
            x=left,
            y=baseline + style.header_line_height,
            text=header.key,
            size=style.text_size,
        ),
        TextGlyph(
            x=right,
            y=baseline,
            text=header.time_signature,
            size=style.text_size,
            align="right",
        ),
    ]


def compose_note(
    note: NoteLayout,
    vertical_offset: float,
    constraints: LayoutConstraints,
    style: RenderStyle,
    system: int | None = None,
) -> list[Glyph]:
    """Ledger lines, head, stem and flags for one note.

    Stems always point up from the right edge of the head; flags hang from
    the stem tip and stack downward.
    """
    spacing = constraints.line_spacing
    y = staff_y(vertical_offset, note.staff_position, spacing)
    glyphs: list[Glyph] = [
        LedgerLine(
            x1=note.x - style.ledger_half_width,
            x2=note.x + style.ledger_half_width,
            y=staff_y(vertical_offset, position, spacing),
            staff_position=position,
            system=system,
        )
        for position in ledger_line_positions(note.staff_position)
    ]

    glyphs.append(
        Notehead(
            x=note.x, y=y, hollow=note.duration in _HOLLOW_DURATIONS, system=system
        )
    )
    if note.duration == MusicalDuration.WHOLE:
        return glyphs

    stem_x = note.x + style.notehead_rx
    stem_top = y - style.stem_length
    glyphs.append(Stem(x=stem_x, y_bottom=y, y_top=stem_top, system=system))
    for k in range(_FLAG_COUNTS.get(note.duration, 0)):
        glyphs.append(
            Flag(x=stem_x, y=stem_top + k * style.flag_spacing, system=system)
        )
    return glyphs


def compose_system(
    system: StaffSystem,
    header: ScoreHeader,
    constraints: LayoutConstraints,
    style: RenderStyle,
) -> list[Glyph]:
    """Glyphs for one staff system, ending with its bar line.

    Every measure is closed by a single bar line at its right edge, except
    the final measure of the last system, which is closed by the double
    bar line at the staff's right end instead.
    """
    top = system.vertical_offset
    bottom = top + constraints.staff_height
    spacing = constraints.line_spacing
    idx = system.index

    glyphs: list[Glyph] = [
        StaffLine(
            x1=constraints.staff_left,
            x2=constraints.staff_right,
            y=top + k * spacing,
            system=idx,
        )
        for k in range(STAFF_LINE_COUNT)
    ]
    glyphs.append(
        Clef(
            x=constraints.staff_left + style.clef_offset,
            y=staff_y(top, _CLEF_ANCHOR_POSITION, spacing),
            line_spacing=spacing,
            system=idx,
        )
    )
    if system.is_first:
        numerator, denominator = header.time_signature_parts
        glyphs.append(
            TimeSignature(
                x=constraints.staff_left + style.time_signature_offset,
                staff_top=top,
                numerator=numerator,
                denominator=denominator,
                line_spacing=spacing,
                system=idx,
            )
        )

    for j, measure in enumerate(system.measures):
        for note in measure.note_layouts:
            glyphs.extend(compose_note(note, top, constraints, style, system=idx))
        closes_score = system.is_last and j == len(system.measures) - 1
        if not closes_score:
            glyphs.append(
                BarLine(x=measure.right_edge, top=top, bottom=bottom, system=idx)
            )

    if system.is_last:
        glyphs.append(
            DoubleBarLine(
                x=constraints.staff_right, top=top, bottom=bottom, system=idx
            )
        )
    return glyphs


def compose(
    systems: Sequence[StaffSystem],
    header: ScoreHeader,
    constraints: LayoutConstraints | None = None,
    style: RenderStyle | None = None,
) -> list[Glyph]:
    """Build the full display list: background, header, then each system."""
    constraints = constraints or LayoutConstraints()
    style = style or RenderStyle()

    glyphs: list[Glyph] = [
        Background(width=constraints.canvas_width, height=constraints.canvas_height)
    ]
    glyphs.extend(compose_header(header, constraints, style))
    for system in systems:
        glyphs.extend(compose_system(system, header, constraints, style))
    return glyphs


# ---------- painting ----------
# Treble clef outline in line-spacing units, relative to the center of its
# bowl on the G line. Each entry is a cubic segment (c1, c2, end), except
# the straight spine.
_CLEF_START = (0.2, 0.3)
_CLEF_SEGMENTS = (
    ((-0.4, 0.2), (-0.3, -0.7), (0.3, -0.7)),
    ((1.2, -0.6), (1.2, 1.2), (0.1, 1.2)),
    ((-1.4, 1.2), (-1.3, -0.8), (-0.1, -1.9)),
    ((0.9, -2.8), (1.0, -4.4), (0.4, -4.9)),
    ((-0.3, -4.4), (-0.4, -3.2), (-0.1, -2.2)),
    (0.4, 2.2),
    ((0.5, 3.0), (-0.4, 3.2), (-0.5, 2.5)),
)
_CLEF_DOT = (-0.3, 2.5, 0.25)


def _stroke_line(
    surface: DrawingSurface,
    start: tuple[float, float],
    end: tuple[float, float],
    width: float,
    color: tuple[int, int, int],
) -> None:
    surface.begin_path()
    surface.move_to(*start)
    surface.line_to(*end)
    surface.stroke(width, color)


def _paint_background(surface, glyph: Background, style):
    surface.fill_rect(0, 0, surface.width, surface.height, style.background)


def _paint_text(surface, glyph: TextGlyph, style):
    surface.text(
        glyph.x,
        glyph.y,
        glyph.text,
        size=glyph.size,
        bold=glyph.bold,
        align=glyph.align,
        color=style.ink,
    )


def _paint_horizontal(surface, glyph: StaffLine | LedgerLine, style):
    _stroke_line(
        surface, (glyph.x1, glyph.y), (glyph.x2, glyph.y), style.staff_line_width, style.ink
    )


def _paint_clef(surface, glyph: Clef, style):
    """Stylized treble clef curling around the G line at ``glyph.y``."""
    s = glyph.line_spacing
    cx = glyph.x + 1.4 * s

    def at(point):
        return cx + point[0] * s, glyph.y + point[1] * s

    surface.begin_path()
    surface.move_to(*at(_CLEF_START))
    for segment in _CLEF_SEGMENTS:
        if isinstance(segment[0], tuple):
            c1, c2, end = segment
            surface.bezier_curve_to(*at(c1), *at(c2), *at(end))
        else:
            surface.line_to(*at(segment))
    surface.stroke(style.clef_line_width, style.ink)

    dx, dy, r = _CLEF_DOT
    surface.ellipse(*at((dx, dy)), r * s, r * s, filled=True, color=style.ink)


def _paint_time_signature(surface, glyph: TimeSignature, style):
    # Digits sit in the upper and lower halves of the staff.
    s = glyph.line_spacing
    for text, baseline in (
        (glyph.numerator, glyph.staff_top + s * 5 / 3),
        (glyph.denominator, glyph.staff_top + s * 10 / 3),
    ):
        surface.text(
            glyph.x,
            baseline,
            text,
            size=style.time_signature_size,
            bold=True,
            align="center",
            color=style.ink,
        )


def _paint_notehead(surface, glyph: Notehead, style):
    surface.ellipse(
        glyph.x,
        glyph.y,
        style.notehead_rx,
        style.notehead_ry,
        style.notehead_rotation,
        filled=not glyph.hollow,
        line_width=style.hollow_line_width,
        color=style.ink,
    )


def _paint_stem(surface, glyph: Stem, style):
    _stroke_line(
        surface, (glyph.x, glyph.y_bottom), (glyph.x, glyph.y_top), style.stem_width, style.ink
    )


def _paint_flag(surface, glyph: Flag, style):
    x, y, h, b = glyph.x, glyph.y, style.flag_height, style.flag_bulge
    surface.begin_path()
    surface.move_to(x, y)
    surface.bezier_curve_to(x + b, y + h / 4, x + b, y + h * 2 / 3, x, y + h)
    surface.close_path()
    surface.fill(style.ink)


def _paint_bar_line(surface, glyph: BarLine, style):
    _stroke_line(
        surface, (glyph.x, glyph.top), (glyph.x, glyph.bottom), style.staff_line_width, style.ink
    )


def _paint_double_bar_line(surface, glyph: DoubleBarLine, style):
    thin_x = glyph.x - style.final_bar_gap
    for x, width in ((thin_x, style.staff_line_width), (glyph.x, style.final_bar_width)):
        _stroke_line(surface, (x, glyph.top), (x, glyph.bottom), width, style.ink)


_PAINTERS: dict[str, Callable[[DrawingSurface, Glyph, RenderStyle], None]] = {
    "background": _paint_background,
    "text": _paint_text,
    "staff_line": _paint_horizontal,
    "ledger_line": _paint_horizontal,
    "clef": _paint_clef,
    "time_signature": _paint_time_signature,
    "notehead": _paint_notehead,
    "stem": _paint_stem,
    "flag": _paint_flag,
    "bar_line": _paint_bar_line,
    "double_bar_line": _paint_double_bar_line,
}


def paint(
    surface: DrawingSurface,
    glyphs: Sequence[Glyph],
    style: RenderStyle | None = None,
) -> None:
    """Issue the drawing primitives for each glyph, in order."""
    style = style or RenderStyle()
    for glyph in glyphs:
        _PAINTERS[glyph.kind](surface, glyph, style)


def render(
    surface: DrawingSurface,
    systems: Sequence[StaffSystem],
    header: ScoreHeader,
    constraints: LayoutConstraints | None = None,
    style: RenderStyle | None = None,
) -> None:
    """Paint a planned score onto ``surface``.

    The surface is owned by this call until it returns; rendering two
    scores into the same surface concurrently is not supported.

    Args:
        surface: Target surface, cleared to the background color first.
        systems: Plan returned by ``layout.plan``.
        header: Header text shown once above the first system.
        constraints: Layout constants used to build the plan.
        style: Glyph sizes and colors.
    """
    glyphs = compose(systems, header, constraints, style)
    logger.debug(f"Painting {len(glyphs)} glyphs on {len(systems)} systems")
    paint(surface, glyphs, style)
