from __future__ import annotations

import logging
from dataclasses import dataclass

from app.services import url_extractor, youtube_extractor
from app.services.content_type import ContentType, DetectedInput, TextInput, UrlInput, YouTubeInput, detect
from app.services.errors import ContentValidationError
from app.services.sanitize import sanitize
from app.services.validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedContent:
    text: str
    content_type: ContentType
    source_url: str | None = None
    video_id: str | None = None


def extract_raw(detected: DetectedInput) -> str:
    if isinstance(detected, YouTubeInput):
        return youtube_extractor.extract_youtube(detected.url, video_id=detected.video_id)
    if isinstance(detected, UrlInput):
        return url_extractor.extract_url(detected.url)
    if isinstance(detected, TextInput):
        return detected.text
    raise TypeError(f"Unsupported input variant: {type(detected).__name__}")


def finalize_text(raw: str) -> str:
    """Sanitize, then validate. Returns the clean text or raises ContentValidationError."""
    clean = sanitize(raw)
    result = validate(clean)
    if not result.is_valid:
        logger.info("Content rejected (security=%s): %s", result.security, result.error)
        raise ContentValidationError(result.error or "Invalid content", security=result.security)
    return clean


def extract_content(raw_input: str) -> ExtractedContent:
    """
    detect -> extract -> sanitize -> validate.

    Any stage failure aborts the request; nothing is retried.
    """
    detected = detect(raw_input)
    logger.info("Detected content type: %s", detected.content_type.value)

    raw = extract_raw(detected)
    clean = finalize_text(raw)

    return ExtractedContent(
        text=clean,
        content_type=detected.content_type,
        source_url=getattr(detected, "url", None),
        video_id=getattr(detected, "video_id", None),
    )


def process(raw_input: str) -> str:
    return extract_content(raw_input).text
