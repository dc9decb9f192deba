import numpy as np
import pytest

from transcription_to_score.models import (
    LayoutConstraints,
    Measure,
    Note,
    Transcription,
)
from transcription_to_score.surface import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Surface double that records every primitive call."""

    def __init__(self, width=1000, height=600):
        self._width = width
        self._height = height
        self.calls = []

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))

    def fill_rect(self, x, y, w, h, color=(255, 255, 255)):
        self._record("fill_rect", x, y, w, h, color=color)

    def begin_path(self):
        self._record("begin_path")

    def move_to(self, x, y):
        self._record("move_to", x, y)

    def line_to(self, x, y):
        self._record("line_to", x, y)

    def bezier_curve_to(self, c1x, c1y, c2x, c2y, x, y):
        self._record("bezier_curve_to", c1x, c1y, c2x, c2y, x, y)

    def close_path(self):
        self._record("close_path")

    def stroke(self, line_width=1.0, color=(0, 0, 0)):
        self._record("stroke", line_width, color=color)

    def fill(self, color=(0, 0, 0)):
        self._record("fill", color=color)

    def ellipse(self, cx, cy, rx, ry, rotation=0.0, **kwargs):
        self._record("ellipse", cx, cy, rx, ry, rotation, **kwargs)

    def text(self, x, y, text, **kwargs):
        self._record("text", x, y, text, **kwargs)

    def to_image(self):
        return np.full((self._height, self._width, 3), 255, np.uint8)

    def names(self):
        return [name for name, _, _ in self.calls]


def make_transcription(measure_pitches, duration="quarter", **kwargs):
    """Build a Transcription from a list of pitch lists, one per measure."""
    measures = [
        Measure(
            notes=[
                Note(pitch=p, musical_duration=duration, time=0.5 * i)
                for i, p in enumerate(pitches)
            ]
        )
        for pitches in measure_pitches
    ]
    fields = {"tempo": 120, "key": "C major", "time_signature": "4/4"}
    fields.update(kwargs)
    return Transcription(measures=measures, **fields)


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def constraints():
    return LayoutConstraints()


@pytest.fixture
def five_measure_transcription():
    # Five measures, each holding one quarter-note C5
    return make_transcription([["C5"]] * 5)


@pytest.fixture
def empty_transcription():
    return Transcription(tempo=90, key="G major", time_signature="3/4")


@pytest.fixture
def mixed_durations_transcription():
    return Transcription(
        title="Etude",
        tempo=100,
        key="A minor",
        time_signature="4/4",
        measures=[
            Measure(
                notes=[
                    Note(pitch="G6", musical_duration="whole", time=0.0),
                    Note(pitch="E4", musical_duration="half", time=0.6),
                    Note(pitch="C#5", musical_duration="eighth", time=1.2),
                    Note(pitch="Bb4", musical_duration="sixteenth", time=1.5),
                ]
            ),
            Measure(notes=[]),
        ],
    )


@pytest.fixture
def transcription_factory():
    return make_transcription
