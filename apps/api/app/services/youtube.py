from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass

from app.core.youtube_settings import youtube_settings
from app.services.content_type import find_youtube_video_id

logger = logging.getLogger(__name__)


class VideoMetadataError(Exception):
    pass


@dataclass(frozen=True)
class VideoMetadata:
    video_id: str
    title: str | None = None
    channel: str | None = None
    duration_sec: int | None = None
    view_count: int | None = None
    upload_date: str | None = None  # YYYY-MM-DD
    description: str | None = None
    webpage_url: str | None = None


def extract_youtube_video_id(url: str) -> str | None:
    """
    Supports:
    - https://www.youtube.com/watch?v=VIDEOID
    - https://youtu.be/VIDEOID
    - https://www.youtube.com/embed/VIDEOID
    - https://www.youtube.com/shorts/VIDEOID
    """
    return find_youtube_video_id(url)


def build_video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _format_upload_date(raw: str | None) -> str | None:
    # yt-dlp reports YYYYMMDD
    raw = (raw or "").strip()
    if len(raw) == 8 and raw.isdigit():
        return f"{raw[:4]}-{raw[4:6]}-{raw[6:]}"
    return raw or None


def _as_int(value) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def parse_video_metadata(video_id: str, data: dict) -> VideoMetadata:
    return VideoMetadata(
        video_id=video_id,
        title=(data.get("title") or None),
        channel=(data.get("channel") or data.get("uploader") or None),
        duration_sec=_as_int(data.get("duration")),
        view_count=_as_int(data.get("view_count")),
        upload_date=_format_upload_date(data.get("upload_date")),
        description=(data.get("description") or None),
        webpage_url=(data.get("webpage_url") or build_video_url(video_id)),
    )


def fetch_video_metadata(video_id: str) -> VideoMetadata:
    """
    Uses yt-dlp (must be installed) to read title/channel/duration/etc.
    without downloading the video.
    """
    cmd = [
        youtube_settings.ytdlp_bin,
        "--dump-single-json",
        "--skip-download",
        "--no-playlist",
        "--no-warnings",
        build_video_url(video_id),
    ]
    if youtube_settings.proxy_url:
        cmd[1:1] = ["--proxy", youtube_settings.proxy_url]

    try:
        p = subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            timeout=youtube_settings.metadata_timeout_sec,
        )
    except FileNotFoundError as e:
        raise VideoMetadataError("yt-dlp not found. Install it and ensure it is on PATH.") from e
    except subprocess.TimeoutExpired as e:
        raise VideoMetadataError("yt-dlp timed out while fetching video metadata.") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise VideoMetadataError(f"yt-dlp failed: {stderr or 'unknown error'}") from e

    raw = (p.stdout or "").strip()
    if not raw:
        raise VideoMetadataError("yt-dlp returned empty output for video metadata.")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise VideoMetadataError("Could not parse yt-dlp JSON output for video metadata.") from e

    if not isinstance(data, dict):
        raise VideoMetadataError("Unexpected yt-dlp JSON output for video metadata.")

    return parse_video_metadata(video_id, data)


def fetch_video_metadata_or_default(video_id: str) -> VideoMetadata:
    try:
        return fetch_video_metadata(video_id)
    except VideoMetadataError as e:
        logger.warning("Metadata lookup failed for video_id=%s: %s", video_id, e)
        return VideoMetadata(video_id=video_id, webpage_url=build_video_url(video_id))
