import pytest
from transcription_to_score.models import Note, Transcription


@pytest.fixture
def valid_note():
    return Note(pitch="C#5", musical_duration="quarter", time=1.25)


@pytest.fixture
def service_payload():
    # Shape produced by the transcription service
    return {
        "tempo": 96,
        "key": "D major",
        "timeSignature": "3/4",
        "measures": [
            {"notes": [{"note": "F#4", "musicalDuration": "half", "time": 0.0}]},
            {"notes": []},
        ],
    }


@pytest.fixture
def valid_transcription(service_payload):
    return Transcription.model_validate(service_payload)
