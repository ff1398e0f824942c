from __future__ import annotations

import logging
import re
from typing import Any

from app.core.extraction_settings import extraction_settings
from app.services import transcript as transcript_service
from app.services import youtube as youtube_service
from app.services.errors import PASTE_HINT, ExtractionError
from app.services.url_extractor import truncate
from app.services.youtube import VideoMetadata

logger = logging.getLogger(__name__)


MIN_TRANSCRIPT_CHARS = 50
MAX_KEY_SECTIONS = 10
DESCRIPTION_PREVIEW_CHARS = 500

CAPTIONS_HINT = "Please ensure the video has captions enabled, or paste the transcript directly."

# Chapter-like markers inside caption lines
SECTION_PATTERNS = [
    # "02:15 Setting up the project" / "1:02:15 - Wrap up"
    re.compile(r"^\s*(?:\d{1,2}:)?\d{1,2}:\d{2}\s*[-–:|]?\s*(?P<title>\S.{2,80})$"),
    # "Chapter 3: Recursion" / "Part 2 - Results"
    re.compile(r"^\s*(?P<title>(?:chapter|part|section|lesson|step)\s+\d+\s*[:.\-–]\s*\S.{0,80})$", re.IGNORECASE),
    # "1. Overview of the API" / "2) Installing"
    re.compile(r"^\s*(?P<title>\d{1,2}[.)]\s+[A-Z].{2,80})$"),
    # "Introduction", "In summary, ..." etc.
    re.compile(
        r"^\s*(?P<title>(?:introduction|overview|summary|conclusion|recap|key takeaways|in summary|to summarize)\b.{0,80})$",
        re.IGNORECASE,
    ),
]


def format_timestamp(seconds: float) -> str:
    total = max(0, int(seconds))
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def find_key_sections(segments: list[dict[str, Any]], limit: int = MAX_KEY_SECTIONS) -> list[str]:
    sections: list[str] = []
    seen: set[str] = set()

    for seg in segments:
        line = (seg.get("text") or "").strip()
        if not line:
            continue
        for pattern in SECTION_PATTERNS:
            m = pattern.match(line)
            if not m:
                continue
            title = m.group("title").strip()
            key = title.lower()
            if key not in seen:
                seen.add(key)
                sections.append(f"[{format_timestamp(float(seg.get('start') or 0.0))}] {title}")
            break
        if len(sections) >= limit:
            break

    return sections


def build_document(
    meta: VideoMetadata,
    source_url: str,
    transcript_text: str,
    key_sections: list[str],
) -> str:
    lines = [
        f"Title: {meta.title or f'YouTube video {meta.video_id}'}",
        f"Channel: {meta.channel or 'Unknown'}",
        f"Duration: {format_timestamp(meta.duration_sec) if meta.duration_sec is not None else 'Unknown'}",
    ]
    if meta.view_count is not None:
        lines.append(f"Views: {meta.view_count:,}")
    if meta.upload_date:
        lines.append(f"Published: {meta.upload_date}")
    lines.append(f"Source: {source_url}")

    description = (meta.description or "").strip()
    if description:
        if len(description) > DESCRIPTION_PREVIEW_CHARS:
            description = description[:DESCRIPTION_PREVIEW_CHARS].rstrip() + "..."
        lines.append(f"Description: {description}")

    parts = ["\n".join(lines)]
    if key_sections:
        parts.append("Key Sections:\n" + "\n".join(f"- {s}" for s in key_sections))
    parts.append("Transcript:\n" + transcript_text)
    return "\n\n".join(parts)


def extract_youtube(url: str, video_id: str | None = None) -> str:
    video_id = video_id or youtube_service.extract_youtube_video_id(url)
    if not video_id:
        raise ExtractionError(f"Invalid YouTube URL: could not find a video id. {PASTE_HINT}")

    logger.info("Extracting YouTube transcript for video_id=%s", video_id)

    try:
        result = transcript_service.fetch_youtube_transcript(video_id)
    except transcript_service.CaptionsUnavailable as e:
        logger.info("No captions for video_id=%s: %s", video_id, e)
        raise ExtractionError(f"No captions found for this video. {CAPTIONS_HINT}") from e
    except transcript_service.VideoNotAvailable as e:
        logger.info("Video unavailable video_id=%s: %s", video_id, e)
        raise ExtractionError(f"This video is unavailable or private. {PASTE_HINT}") from e
    except transcript_service.TranscriptNotFound as e:
        logger.warning("Transcript fetch failed for video_id=%s: %s", video_id, e)
        raise ExtractionError(f"Failed to fetch the video transcript. {CAPTIONS_HINT}") from e

    transcript_text = result["text"]
    if len(transcript_text) < MIN_TRANSCRIPT_CHARS:
        raise ExtractionError(f"The video transcript is too short to learn from. {PASTE_HINT}")

    meta = youtube_service.fetch_video_metadata_or_default(video_id)
    key_sections = find_key_sections(result["segments"])

    document = build_document(meta, url, transcript_text, key_sections)
    document = truncate(document, extraction_settings.max_extracted_chars)
    logger.info(
        "Built transcript document for video_id=%s (%d chars, %d key sections, method=%s)",
        video_id,
        len(document),
        len(key_sections),
        result.get("method"),
    )
    return document
