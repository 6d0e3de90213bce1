import pytest
from pydantic import ValidationError

from lifecapture.models import (
    ClassificationResult,
    EventData,
    ExtractedResult,
    LinkData,
    NoteData,
    RECORD_MODELS,
    ScreenshotType,
    SongData,
)


def test_every_type_has_a_record_model():
    assert set(RECORD_MODELS) == set(ScreenshotType)


def test_result_rejects_mismatched_record():
    song = SongData(title="So What", artist="Miles Davis")
    with pytest.raises(ValidationError):
        ExtractedResult(type=ScreenshotType.LINK, data=song, confidence=0.9)


def test_result_payload_is_camel_case_and_drops_nulls():
    event = EventData(title="Demo", date="2026-03-05", time="18:30", end_date="2026-03-05")
    payload = ExtractedResult(type=ScreenshotType.EVENT, data=event, confidence=0.7).to_payload()

    assert payload == {
        "type": "event",
        "data": {"title": "Demo", "date": "2026-03-05", "time": "18:30", "host": "", "endDate": "2026-03-05"},
        "confidence": 0.7,
    }


def test_records_accept_wire_and_python_names():
    assert SongData.model_validate({"title": "A", "artist": "B", "appleMusicId": "1"}).apple_music_id == "1"
    assert SongData(title="A", artist="B", apple_music_id="1").apple_music_id == "1"


def test_records_are_frozen():
    link = LinkData(title="Docs", url="https://docs.example")
    with pytest.raises(ValidationError):
        link.title = "Other"


def test_blank_required_field_rejected():
    with pytest.raises(ValidationError):
        NoteData(title="   ", content="x")


def test_unknown_keys_ignored():
    note = NoteData.model_validate({"title": "T", "content": "C", "mood": "happy"})
    assert note.tags == []


def test_confidence_bounds():
    with pytest.raises(ValidationError):
        ClassificationResult(type=ScreenshotType.NOTE, confidence=1.2)
