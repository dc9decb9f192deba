"""Layout planner: transcription to staff-system geometry.

The planner is a pure function of the transcription and the layout
constraints. It never touches a drawing surface, so the plan it returns can
be inspected directly in tests.
"""

import logging
import math
from collections.abc import Sequence

from transcription_to_score.models import (
    LayoutConstraints,
    Measure,
    MeasureLayout,
    Note,
    NoteLayout,
    StaffSystem,
    Transcription,
)
from transcription_to_score.pitch import staff_position

logger = logging.getLogger(__name__)


def system_count(measure_count: int, measures_per_system: int) -> int:
    """Number of staff systems needed; at least one even for an empty score."""
    return math.ceil(max(measure_count, 1) / measures_per_system)


def measure_width(constraints: LayoutConstraints, is_first: bool) -> float:
    """Uniform measure width for a system.

    The staff width left after the reserved leading space is split evenly
    between ``measures_per_system`` measures, whether or not the system is
    full.
    """
    usable = constraints.staff_width - constraints.reserved_width(is_first)
    return usable / constraints.measures_per_system


def layout_note(
    note: Note, slot_index: int, measure_offset: float, slot_width: float,
    constraints: LayoutConstraints,
) -> NoteLayout:
    """Place a single note in its slot."""
    x = measure_offset + constraints.measure_interior_margin + slot_index * slot_width
    return NoteLayout(
        x=x,
        staff_position=staff_position(note.pitch),
        duration=note.musical_duration,
        pitch=note.pitch,
    )


def layout_measure(
    measure: Measure,
    index: int,
    horizontal_offset: float,
    width: float,
    constraints: LayoutConstraints,
) -> MeasureLayout:
    """Spread a measure's notes evenly across its interior.

    The slot divisor is ``max(note_count, min_note_slots)`` so a measure
    with few notes keeps them at the same spacing as a fuller one.

    Args:
        measure: Source measure.
        index: Global measure number.
        horizontal_offset: Left edge of the measure.
        width: Measure width.
        constraints: Layout constraints.

    Returns:
        MeasureLayout with one NoteLayout per note, in order.
    """
    interior = width - 2 * constraints.measure_interior_margin
    slots = max(len(measure.notes), constraints.min_note_slots)
    slot_width = interior / slots
    notes = [
        layout_note(note, i, horizontal_offset, slot_width, constraints)
        for i, note in enumerate(measure.notes)
    ]
    return MeasureLayout(
        index=index,
        horizontal_offset=horizontal_offset,
        width=width,
        note_layouts=notes,
    )


def layout_system(
    index: int,
    measures: Sequence[Measure],
    first_measure_index: int,
    total_systems: int,
    constraints: LayoutConstraints,
) -> StaffSystem:
    """Build one staff system from its slice of measures."""
    is_first = index == 0
    is_last = index == total_systems - 1
    reserved = constraints.reserved_width(is_first)
    width = measure_width(constraints, is_first)
    start_x = constraints.staff_left + reserved

    measure_layouts = [
        layout_measure(
            measure,
            first_measure_index + j,
            start_x + j * width,
            width,
            constraints,
        )
        for j, measure in enumerate(measures)
    ]

    return StaffSystem(
        index=index,
        vertical_offset=constraints.staff_top + index * constraints.system_spacing,
        measures=measure_layouts,
        is_first=is_first,
        is_last=is_last,
        leading_reserved_width=reserved,
    )


def plan(
    transcription: Transcription, constraints: LayoutConstraints | None = None
) -> list[StaffSystem]:
    """Compute the staff-system layout for a transcription.

    Measures are cut into consecutive groups of ``measures_per_system``. A
    transcription without measures still yields one empty system so that
    the staff and clef are drawn.

    Args:
        transcription: Score to lay out.
        constraints: Layout constants; defaults are used when omitted.

    Returns:
        Ordered list of StaffSystem objects.
    """
    constraints = constraints or LayoutConstraints()
    measures = transcription.measures
    per_system = constraints.measures_per_system
    total = system_count(len(measures), per_system)

    systems = []
    for i in range(total):
        start = i * per_system
        end = min(start + per_system, len(measures))
        systems.append(
            layout_system(i, measures[start:end], start, total, constraints)
        )

    logger.debug(f"Planned {len(measures)} measures on {total} staff systems")

    required = required_canvas_height(systems, constraints)
    if required > constraints.canvas_height:
        logger.warning(
            f"Score needs {required:.0f}px but canvas is "
            f"{constraints.canvas_height}px; lower systems will be clipped"
        )
    return systems


def required_canvas_height(
    systems: Sequence[StaffSystem], constraints: LayoutConstraints
) -> float:
    """Canvas height needed to show the lowest drawn element of every system.

    That element is the bottom staff line, or the head of a note hanging
    below it, which reaches half a line spacing past its own step.
    """
    if not systems:
        return float(constraints.canvas_height)
    half_step = constraints.line_spacing / 2
    lowest = 0.0
    for system in systems:
        bottom = constraints.staff_height
        for measure in system.measures:
            for note in measure.note_layouts:
                bottom = max(bottom, (note.staff_position + 1) * half_step)
        lowest = max(lowest, system.vertical_offset + bottom)
    # Pixel row of the lowest element is included.
    return lowest + 1
