"""Pitch name to staff position mapping for the treble staff.

Staff positions are signed half-line steps measured downward from the top
staff line: 0 is the top line, 8 the bottom line, negative values sit above
the staff and values greater than 8 below it.
"""

import logging
import re

logger = logging.getLogger(__name__)


# Ordered from highest to lowest; each row is one diatonic step.
PITCH_POSITIONS: tuple[tuple[str, int], ...] = (
    ("C8", -14),
    ("B7", -13),
    ("A7", -12),
    ("G7", -11),
    ("F7", -10),
    ("E7", -9),
    ("D7", -8),
    ("C7", -7),
    ("B6", -6),
    ("A6", -5),
    ("G6", -4),
    ("F6", -3),
    ("E6", -2),
    ("D6", -1),
    ("C6", 0),
    ("B5", 1),
    ("A5", 2),
    ("G5", 3),
    ("F5", 4),
    ("E5", 5),
    ("D5", 6),
    ("C5", 7),
    ("B4", 8),
    ("A4", 9),
    ("G4", 10),
    ("F4", 11),
    ("E4", 12),
    ("D4", 13),
    ("C4", 14),
    ("B3", 15),
    ("A3", 16),
    ("G3", 17),
    ("F3", 18),
    ("E3", 19),
    ("D3", 20),
    ("C3", 21),
    ("B2", 22),
    ("A2", 23),
)

_POSITION_BY_NAME = dict(PITCH_POSITIONS)

# Position used for any pitch outside the table (shared with C5).
DEFAULT_STAFF_POSITION = _POSITION_BY_NAME["C5"]

TOP_LINE_POSITION = 0
BOTTOM_LINE_POSITION = 8

_PITCH_RE = re.compile(r"^(?P<letter>[A-G])(?P<accidental>##|bb|#|b|♯|♭)?(?P<octave>-?\d+)$")


def split_pitch(pitch: str) -> tuple[str, str, str] | None:
    """Split a pitch name into letter, accidental and octave.

    Args:
        pitch: Pitch name such as "C#5" or "Bb3".

    Returns:
        A (letter, accidental, octave) tuple with an empty accidental for
        natural notes, or None if the string is not a pitch name.
    """
    match = _PITCH_RE.match(pitch.strip()) if isinstance(pitch, str) else None
    if match is None:
        return None
    return match["letter"], match["accidental"] or "", match["octave"]


def strip_accidental(pitch: str) -> str:
    """Return the pitch name without its accidental ("C#5" -> "C5").

    Strings that are not pitch names are returned unchanged.
    """
    parts = split_pitch(pitch)
    if parts is None:
        return pitch
    letter, _, octave = parts
    return f"{letter}{octave}"


def staff_position(pitch: str) -> int:
    """Look up the staff position of a pitch name.

    Accidentals are ignored, so "C#5" and "C5" share a position. Unknown
    letters, octaves outside the table and malformed strings resolve to
    ``DEFAULT_STAFF_POSITION`` instead of raising.

    Args:
        pitch: Pitch name.

    Returns:
        Signed staff position.
    """
    position = _POSITION_BY_NAME.get(strip_accidental(pitch))
    if position is None:
        logger.debug(f"Unrecognized pitch {pitch!r}, using default position")
        return DEFAULT_STAFF_POSITION
    return position


def ledger_line_positions(position: int) -> list[int]:
    """Staff positions that need a ledger line for a note at ``position``.

    Ledger lines sit on every even step outside the staff, from the step
    next to the nearest staff boundary out to the note.

    Args:
        position: Signed staff position of the note.

    Returns:
        Ledger positions ordered from the staff outward; empty for notes
        inside the staff or in the space just outside it.
    """
    if position < TOP_LINE_POSITION:
        return list(range(TOP_LINE_POSITION - 2, position - 1, -2))
    if position > BOTTOM_LINE_POSITION:
        return list(range(BOTTOM_LINE_POSITION + 2, position + 1, 2))
    return []


def staff_y(vertical_offset: float, position: int, line_spacing: float) -> float:
    """Convert a staff position to a y-coordinate below ``vertical_offset``."""
    return vertical_offset + position * (line_spacing / 2.0)
