import pytest

from app.services import extraction, url_extractor, youtube_extractor
from app.services.content_type import ContentType
from app.services.errors import ContentValidationError, ExtractionError


def test_plain_text_passes_through_trimmed():
    assert extraction.process("  Cells are the basic unit of life.  ") == "Cells are the basic unit of life."


def test_text_is_sanitized():
    out = extraction.process("<b>Mitosis</b> produces two <i>identical</i> cells.")
    assert out == "Mitosis produces two identical cells."


def test_url_content_is_fetched_and_sanitized(monkeypatch):
    seen = {}

    def fake_extract_url(url):
        seen["url"] = url
        return "<h1>Heading</h1> Body text about the water cycle and evaporation."

    monkeypatch.setattr(url_extractor, "extract_url", fake_extract_url)

    result = extraction.extract_content(" https://example.com/water ")

    assert seen["url"] == "https://example.com/water"
    assert result.content_type == ContentType.URL
    assert result.source_url == "https://example.com/water"
    assert result.text == "Heading Body text about the water cycle and evaporation."


def test_youtube_routes_to_transcript_extractor(monkeypatch):
    seen = {}

    def fake_extract_youtube(url, video_id=None):
        seen["video_id"] = video_id
        return "Title: Demo\n\nTranscript:\nsome transcript words"

    monkeypatch.setattr(youtube_extractor, "extract_youtube", fake_extract_youtube)

    result = extraction.extract_content("https://youtu.be/dQw4w9WgXcQ")

    assert seen["video_id"] == "dQw4w9WgXcQ"
    assert result.content_type == ContentType.YOUTUBE
    assert result.video_id == "dQw4w9WgXcQ"
    assert result.text.startswith("Title: Demo")


def test_extraction_errors_propagate(monkeypatch):
    def boom(url):
        raise ExtractionError("The website took too long to respond.")

    monkeypatch.setattr(url_extractor, "extract_url", boom)

    with pytest.raises(ExtractionError):
        extraction.process("https://example.com/slow")


def test_empty_after_sanitizing_is_rejected():
    with pytest.raises(ContentValidationError) as e:
        extraction.process("<script>alert(1)</script>")
    assert e.value.message == "Content cannot be empty"
    assert e.value.security is False


def test_too_long_text_is_rejected():
    with pytest.raises(ContentValidationError) as e:
        extraction.process("a" * 20_001)
    assert "20,000" in e.value.message


def test_residual_code_is_a_security_rejection():
    with pytest.raises(ContentValidationError) as e:
        extraction.process("Then call eval(payload) and document.write(it).")
    assert e.value.security is True
