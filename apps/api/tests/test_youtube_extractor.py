import pytest

from app.services import transcript as transcript_service
from app.services import youtube as youtube_service
from app.services import youtube_extractor
from app.services.errors import ExtractionError
from app.services.youtube import VideoMetadata

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

SEGMENTS = [
    {"text": "Introduction to graphs", "start": 0.0, "duration": 3.0},
    {"text": "a graph is a set of vertices connected by edges", "start": 3.0, "duration": 4.0},
    {"text": "Chapter 2: Trees", "start": 95.0, "duration": 2.0},
    {"text": "a tree is a connected graph without cycles", "start": 97.0, "duration": 4.0},
]


def _fake_transcript(text=None, segments=SEGMENTS):
    def fake(video_id, language=None):
        body = text if text is not None else " ".join(s["text"] for s in segments)
        return {"segments": segments, "text": body, "language": "en", "method": "captions"}

    return fake


def _fake_meta(video_id):
    return VideoMetadata(
        video_id=video_id,
        title="Graph Theory 101",
        channel="Math Channel",
        duration_sec=754,
        view_count=12345,
        upload_date="2024-01-31",
        description="A gentle introduction.",
    )


@pytest.fixture
def patched(monkeypatch):
    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", _fake_transcript())
    monkeypatch.setattr(youtube_service, "fetch_video_metadata_or_default", _fake_meta)
    return monkeypatch


def test_document_layout(patched):
    doc = youtube_extractor.extract_youtube(URL)

    assert doc.startswith("Title: Graph Theory 101\nChannel: Math Channel\nDuration: 12:34\n")
    assert "Views: 12,345" in doc
    assert "Published: 2024-01-31" in doc
    assert f"Source: {URL}" in doc
    assert "Description: A gentle introduction." in doc
    assert "Key Sections:\n- [00:00] Introduction to graphs\n- [01:35] Chapter 2: Trees" in doc
    assert doc.index("Key Sections:") < doc.index("Transcript:\n")
    assert doc.rstrip().endswith("a tree is a connected graph without cycles")


def test_metadata_fallback_still_builds_document(monkeypatch):
    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", _fake_transcript())
    monkeypatch.setattr(
        youtube_service,
        "fetch_video_metadata_or_default",
        lambda video_id: VideoMetadata(video_id=video_id),
    )

    doc = youtube_extractor.extract_youtube(URL)

    assert doc.startswith("Title: YouTube video dQw4w9WgXcQ\nChannel: Unknown\nDuration: Unknown\n")
    assert "Views:" not in doc


def test_missing_captions_message(monkeypatch):
    def fake(video_id, language=None):
        raise transcript_service.CaptionsUnavailable("no tracks")

    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", fake)

    with pytest.raises(ExtractionError) as e:
        youtube_extractor.extract_youtube(URL)
    assert "captions enabled" in e.value.message.lower()


def test_unavailable_video_message(monkeypatch):
    def fake(video_id, language=None):
        raise transcript_service.VideoNotAvailable("private")

    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", fake)

    with pytest.raises(ExtractionError) as e:
        youtube_extractor.extract_youtube(URL)
    assert "unavailable or private" in e.value.message


def test_short_transcript_is_rejected(monkeypatch):
    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", _fake_transcript(text="too short"))
    monkeypatch.setattr(youtube_service, "fetch_video_metadata_or_default", _fake_meta)

    with pytest.raises(ExtractionError):
        youtube_extractor.extract_youtube(URL)


def test_long_documents_are_truncated(monkeypatch):
    long_text = "word " * 6000
    monkeypatch.setattr(transcript_service, "fetch_youtube_transcript", _fake_transcript(text=long_text))
    monkeypatch.setattr(youtube_service, "fetch_video_metadata_or_default", _fake_meta)

    doc = youtube_extractor.extract_youtube(URL)

    assert doc.endswith("...")
    assert len(doc) <= 15_000 + len("...")


def test_url_without_video_id():
    with pytest.raises(ExtractionError):
        youtube_extractor.extract_youtube("https://example.com/not-youtube")


def test_find_key_sections_dedupes_and_limits():
    segments = [{"text": f"Part {i}: topic", "start": float(i * 60)} for i in range(1, 15)]
    segments.insert(1, {"text": "part 1: topic", "start": 5.0})

    sections = youtube_extractor.find_key_sections(segments)

    assert len(sections) == 10
    assert sections[0] == "[01:00] Part 1: topic"
    assert sum("part 1:" in s.lower() for s in sections) == 1


def test_format_timestamp():
    assert youtube_extractor.format_timestamp(0) == "00:00"
    assert youtube_extractor.format_timestamp(754) == "12:34"
    assert youtube_extractor.format_timestamp(3725) == "1:02:05"
