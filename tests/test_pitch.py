import pytest

from transcription_to_score.pitch import (
    DEFAULT_STAFF_POSITION,
    PITCH_POSITIONS,
    ledger_line_positions,
    split_pitch,
    staff_position,
    staff_y,
    strip_accidental,
)


def test_table_is_one_step_per_row():
    positions = [pos for _, pos in PITCH_POSITIONS]
    assert positions == list(range(-14, 24))


@pytest.mark.parametrize(
    "pitch, expected",
    [("C6", 0), ("B4", 8), ("C5", 7), ("E4", 12), ("C8", -14), ("A2", 23)],
)
def test_staff_position_lookup(pitch, expected):
    assert staff_position(pitch) == expected


def test_default_is_c5_position():
    assert DEFAULT_STAFF_POSITION == 7


@pytest.mark.parametrize("pitch", ["H9", "C9", "G1", "", "C", "c5", "C#x5", "45", "e5", "B-3"])
def test_unknown_pitch_falls_back_to_default(pitch):
    assert staff_position(pitch) == DEFAULT_STAFF_POSITION


@pytest.mark.parametrize("pitch", ["C#5", "Cb5", "C♯5", "C##5", "Cbb5"])
def test_accidentals_do_not_move_notes(pitch):
    assert staff_position(pitch) == staff_position("C5")


def test_split_and_strip():
    assert split_pitch("Bb3") == ("B", "b", "3")
    assert split_pitch("G4") == ("G", "", "4")
    assert split_pitch("nonsense") is None
    assert strip_accidental("F#4") == "F4"
    assert strip_accidental("nonsense") == "nonsense"


@pytest.mark.parametrize(
    "position, expected",
    [
        (-4, [-2, -4]),
        (12, [10, 12]),
        (-3, [-2]),
        (13, [10, 12]),
        (-1, []),
        (9, []),
        (0, []),
        (8, []),
        (4, []),
    ],
)
def test_ledger_line_positions(position, expected):
    assert ledger_line_positions(position) == expected


def test_ledger_line_count_matches_distance():
    assert len(ledger_line_positions(-14)) == 7
    assert len(ledger_line_positions(23)) == 7


def test_staff_y():
    assert staff_y(130.0, 0, 12.0) == pytest.approx(130.0)
    assert staff_y(130.0, 8, 12.0) == pytest.approx(178.0)
    assert staff_y(130.0, -4, 12.0) == pytest.approx(106.0)
