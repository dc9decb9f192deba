import logging
import math

import pytest

from transcription_to_score.layout import (
    layout_measure,
    measure_width,
    plan,
    required_canvas_height,
    system_count,
)
from transcription_to_score.models import LayoutConstraints, Measure, Note


@pytest.mark.parametrize("measures_per_system", [1, 3, 4, 5])
@pytest.mark.parametrize("measure_count", [0, 1, 3, 4, 5, 8, 9, 13])
def test_system_count_and_reconstruction(
    transcription_factory, measure_count, measures_per_system
):
    pitches = [[f"{letter}4"] for letter in "CDEFGAB"]
    source = [pitches[i % len(pitches)] for i in range(measure_count)]
    transcription = transcription_factory(source)
    constraints = LayoutConstraints(measures_per_system=measures_per_system)

    systems = plan(transcription, constraints)

    assert len(systems) == max(math.ceil(measure_count / measures_per_system), 1)
    flat = [m for s in systems for m in s.measures]
    assert [m.index for m in flat] == list(range(measure_count))
    assert [[n.pitch for n in m.note_layouts] for m in flat] == source


def test_system_count_minimum_one():
    assert system_count(0, 4) == 1
    assert system_count(4, 4) == 1
    assert system_count(5, 4) == 2


def test_empty_transcription_gets_one_empty_system(empty_transcription):
    systems = plan(empty_transcription)
    assert len(systems) == 1
    assert systems[0].measures == []
    assert systems[0].is_first and systems[0].is_last


def test_first_and_last_flags(five_measure_transcription):
    systems = plan(five_measure_transcription)
    assert [s.is_first for s in systems] == [True, False]
    assert [s.is_last for s in systems] == [False, True]


def test_vertical_offsets(five_measure_transcription, constraints):
    systems = plan(five_measure_transcription, constraints)
    assert systems[0].vertical_offset == pytest.approx(constraints.staff_top)
    assert systems[1].vertical_offset == pytest.approx(
        constraints.staff_top + constraints.system_spacing
    )


def test_equal_measure_widths_within_system(five_measure_transcription, constraints):
    systems = plan(five_measure_transcription, constraints)
    first = systems[0]
    widths = {m.width for m in first.measures}
    assert len(widths) == 1
    expected = (constraints.staff_width - constraints.reserved_width(True)) / 4
    assert widths.pop() == pytest.approx(expected)
    assert systems[1].measures[0].width == pytest.approx(
        (constraints.staff_width - constraints.leading_reserved_width) / 4
    )


def test_measures_are_contiguous(five_measure_transcription, constraints):
    first = plan(five_measure_transcription, constraints)[0]
    start = constraints.staff_left + first.leading_reserved_width
    assert first.measures[0].horizontal_offset == pytest.approx(start)
    for left, right in zip(first.measures, first.measures[1:]):
        assert right.horizontal_offset == pytest.approx(left.right_edge)
    # A full system ends exactly at the staff's right end
    assert first.measures[-1].right_edge == pytest.approx(constraints.staff_right)


def test_measure_width_ignores_fill(constraints):
    assert measure_width(constraints, is_first=False) == pytest.approx(202.5)
    assert measure_width(constraints, is_first=True) == pytest.approx(197.5)


def test_sparse_measure_uses_minimum_slots(constraints):
    measure = Measure(
        notes=[Note(pitch="C5", musical_duration="quarter", time=t) for t in (0, 1)]
    )
    layout = layout_measure(measure, 0, 100.0, 200.0, constraints)
    xs = [n.x for n in layout.note_layouts]
    # interior 180 split into 4 slots of 45
    assert xs == pytest.approx([110.0, 155.0])


def test_dense_measure_uses_note_count(constraints):
    measure = Measure(
        notes=[Note(pitch="D5", musical_duration="sixteenth", time=0) for _ in range(6)]
    )
    layout = layout_measure(measure, 0, 0.0, 200.0, constraints)
    xs = [n.x for n in layout.note_layouts]
    assert xs[1] - xs[0] == pytest.approx(30.0)
    assert xs[-1] < layout.right_edge


def test_note_layout_fields(mixed_durations_transcription):
    notes = plan(mixed_durations_transcription)[0].measures[0].note_layouts
    assert [n.staff_position for n in notes] == [-4, 12, 7, 8]
    assert [n.duration.value for n in notes] == ["whole", "half", "eighth", "sixteenth"]


def test_unknown_pitch_is_laid_out(transcription_factory):
    systems = plan(transcription_factory([["H9", "C5"]]))
    positions = [n.staff_position for n in systems[0].measures[0].note_layouts]
    assert positions == [7, 7]


def test_plan_is_idempotent(five_measure_transcription):
    assert plan(five_measure_transcription) == plan(five_measure_transcription)


def test_required_canvas_height(transcription_factory, constraints):
    systems = plan(transcription_factory([["C5"]] * 9), constraints)
    last_top = constraints.staff_top + 2 * constraints.system_spacing
    assert required_canvas_height(systems, constraints) == pytest.approx(
        last_top + constraints.staff_height + 1
    )


def test_required_canvas_height_follows_low_notes(transcription_factory, constraints):
    systems = plan(transcription_factory([["C5"], ["A2"]]), constraints)
    # A2 sits 23 half steps below the top line; its head reaches one more.
    assert required_canvas_height(systems, constraints) == pytest.approx(
        constraints.staff_top + 24 * constraints.line_spacing / 2 + 1
    )


def test_four_full_systems_fit_default_canvas(transcription_factory, caplog):
    caplog.set_level(logging.WARNING, logger="transcription_to_score.layout")
    systems = plan(transcription_factory([["C5"]] * 16))
    assert len(systems) == 4
    assert not any("clipped" in r.getMessage() for r in caplog.records)


def test_overflow_logs_warning(transcription_factory, caplog):
    caplog.set_level(logging.WARNING, logger="transcription_to_score.layout")
    plan(transcription_factory([["C5"]] * 20))
    assert any("clipped" in r.getMessage() for r in caplog.records)
