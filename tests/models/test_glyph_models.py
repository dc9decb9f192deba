from pydantic import TypeAdapter
from transcription_to_score.models import BarLine, Glyph, Notehead


def test_glyph_union_dispatches_on_kind():
    adapter = TypeAdapter(Glyph)
    glyph = adapter.validate_python({"kind": "bar_line", "x": 1, "top": 2, "bottom": 3})
    assert isinstance(glyph, BarLine)


def test_notehead_defaults_filled():
    head = Notehead(x=0, y=0)
    assert head.kind == "notehead"
    assert head.hollow is False
    assert head.system is None
