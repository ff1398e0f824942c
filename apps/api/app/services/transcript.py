# apps/api/app/services/transcript.py
from __future__ import annotations

import logging
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Any

import requests
import webvtt
from webvtt.errors import MalformedFileError
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from app.core.extraction_settings import extraction_settings
from app.core.youtube_settings import youtube_settings
from app.services.youtube import build_video_url

logger = logging.getLogger(__name__)


class TranscriptNotFound(Exception):
    pass


class CaptionsUnavailable(TranscriptNotFound):
    """The video exists but has no usable caption track."""


class VideoNotAvailable(TranscriptNotFound):
    """The video is private, removed, or the id is invalid."""


# -----------------------------
# Cleaning + normalization
# -----------------------------
_OVERLAP_MAX_WORDS = 18
_OVERLAP_MIN_WORDS = 4

_NOISE_WORDS = r"(music|applause|laughter|intro|outro|silence|sfx|sound effects?)"
_NOISE_FULL_RE = re.compile(rf"^\s*\[{_NOISE_WORDS}\]\s*$", re.IGNORECASE)
_NOISE_PREFIX_RE = re.compile(rf"^\s*(?:\[{_NOISE_WORDS}\]\s*)+", re.IGNORECASE)

_word_re = re.compile(r"[A-Za-z0-9']+")


def _words(s: str) -> list[str]:
    return [w.lower() for w in _word_re.findall(s or "")]


def _normalize_space(s: str) -> str:
    s = (s or "").replace("\u200b", " ")
    s = re.sub(r"\s+", " ", s).strip()
    return s


def _strip_leading_word_overlap(prev_text: str, cur_text: str) -> str:
    """
    Rolling captions often repeat the tail of the previous caption at the head of the next.
    We remove the largest word-overlap:
      suffix(prev_words, k) == prefix(cur_words, k)
    for k in [max_words..min_words].
    """
    pw = _words(prev_text)
    cw = _words(cur_text)
    if not pw or not cw:
        return cur_text

    max_k = min(_OVERLAP_MAX_WORDS, len(pw), len(cw))
    for k in range(max_k, _OVERLAP_MIN_WORDS - 1, -1):
        if pw[-k:] == cw[:k]:
            cur_tokens = cur_text.split()
            return " ".join(cur_tokens[k:]).strip()

    return cur_text


def _vtt_timestamp_to_seconds(ts: str) -> float:
    m = re.match(r"(?P<h>\d+):(?P<m>\d+):(?P<s>\d+(?:\.\d+)?)", ts.strip())
    if not m:
        return 0.0
    h = float(m.group("h"))
    mi = float(m.group("m"))
    s = float(m.group("s"))
    return h * 3600.0 + mi * 60.0 + s


def segments_to_text(segments: list[dict[str, Any]]) -> str:
    parts: list[str] = []
    for seg in segments:
        txt = (seg.get("text") or "").strip()
        if txt:
            parts.append(txt)
    return _normalize_space(" ".join(parts))


def clean_segments(segments: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Clean + normalize transcript segments:
    - order by start time
    - normalize spaces
    - strip leading bracketed noise prefix like "[Music] ..."
    - drop pure noise tokens like "[Music]"
    - strip rolling-caption overlap vs previous kept segment (word-based)
    - drop consecutive duplicates
    Returns segments in schema: {text, start, duration}
    """
    ordered = sorted(segments or [], key=lambda s: float(s.get("start") or 0.0))
    cleaned: list[dict[str, Any]] = []

    for seg in ordered:
        txt = _normalize_space(seg.get("text") or "")
        txt = _NOISE_PREFIX_RE.sub("", txt).strip()
        if not txt or _NOISE_FULL_RE.match(txt):
            continue

        start = float(seg.get("start") or 0.0)
        duration = max(0.0, float(seg.get("duration") or 0.0))

        if cleaned:
            last = cleaned[-1]
            if _words(last["text"]) == _words(txt):
                continue
            txt = _normalize_space(_strip_leading_word_overlap(last["text"], txt))
            if not txt:
                # nothing new in this caption; extend timing coverage on last segment
                last["duration"] = max(last["duration"], start + duration - last["start"])
                continue

        cleaned.append({"text": txt, "start": start, "duration": duration})

    return cleaned


# -----------------------------
# Fetchers
# -----------------------------
class _TimeoutSession(requests.Session):
    """requests.Session with a default timeout on every call."""

    def __init__(self, timeout: float) -> None:
        super().__init__()
        self._timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self._timeout)
        return super().request(method, url, **kwargs)


def _build_transcript_api() -> YouTubeTranscriptApi:
    proxy_config = None
    if youtube_settings.proxy_url:
        proxy_config = GenericProxyConfig(
            http_url=youtube_settings.proxy_url,
            https_url=youtube_settings.proxy_url,
        )
    return YouTubeTranscriptApi(
        proxy_config=proxy_config,
        http_client=_TimeoutSession(extraction_settings.timeout_sec),
    )


def _fetch_with_transcript_api(video_id: str, language: str | None) -> dict[str, Any]:
    api = _build_transcript_api()
    transcript_list = api.list(video_id)

    if language:
        transcript = transcript_list.find_transcript([language])
    else:
        # manual tracks are listed before auto-generated ones
        transcript = next(iter(transcript_list), None)
        if transcript is None:
            raise CaptionsUnavailable(f"No caption tracks listed for video {video_id}")

    segments = transcript.fetch().to_raw_data()
    return {
        "segments": segments,
        "language": transcript.language_code,
        "method": "captions",
    }


def _fetch_with_ytdlp_subs(video_id: str, language: str | None) -> dict[str, Any]:
    url = build_video_url(video_id)

    with tempfile.TemporaryDirectory() as td:
        outtmpl = str(Path(td) / "%(id)s.%(ext)s")

        args = [
            youtube_settings.ytdlp_bin,
            "--skip-download",
            "--write-subs",
            "--write-auto-subs",
            "--sub-format",
            "vtt",
            "--sub-langs",
            language or "en.*",
            "-o",
            outtmpl,
            url,
        ]

        if youtube_settings.proxy_url:
            args[1:1] = ["--proxy", youtube_settings.proxy_url]

        try:
            p = subprocess.run(args, capture_output=True, text=True, timeout=youtube_settings.subtitles_timeout_sec)
        except FileNotFoundError as e:
            raise TranscriptNotFound("yt-dlp not found. Install it and ensure it is on PATH.") from e
        except subprocess.TimeoutExpired as e:
            raise TranscriptNotFound("yt-dlp timed out while fetching subtitles") from e

        if p.returncode != 0:
            raise TranscriptNotFound(f"yt-dlp subs failed: {p.stderr.strip() or p.stdout.strip()}")

        vtts = list(Path(td).glob("*.vtt"))
        if not vtts:
            raise CaptionsUnavailable("yt-dlp succeeded but no .vtt subtitles found")

        vtt_path = sorted(vtts, key=lambda x: x.stat().st_size, reverse=True)[0]

        try:
            captions = webvtt.read(str(vtt_path))
        except (MalformedFileError, OSError) as e:
            raise TranscriptNotFound(f"Could not parse yt-dlp subtitles: {e}") from e

        segments: list[dict[str, Any]] = []
        for caption in captions:
            start = _vtt_timestamp_to_seconds(caption.start)
            end = _vtt_timestamp_to_seconds(caption.end)
            txt = _normalize_space((caption.text or "").replace("\n", " "))
            if not txt:
                continue
            segments.append({"text": txt, "start": start, "duration": max(0.0, end - start)})

        return {"segments": segments, "language": language or "unknown", "method": "ytdlp_subs"}


def fetch_youtube_transcript(video_id: str, language: str | None = None) -> dict[str, Any]:
    """
    Returns {"segments": [{text, start, duration}], "text": str, "language": str, "method": str}.

    Raises CaptionsUnavailable, VideoNotAvailable or TranscriptNotFound.
    """
    language = language or youtube_settings.language

    try:
        result = _fetch_with_transcript_api(video_id, language)
    except (TranscriptsDisabled, NoTranscriptFound) as e:
        raise CaptionsUnavailable(str(e)) from e
    except (VideoUnavailable, InvalidVideoId) as e:
        raise VideoNotAvailable(str(e)) from e
    except (CouldNotRetrieveTranscript, requests.RequestException) as e:
        if not youtube_settings.enable_ytdlp_fallback:
            raise TranscriptNotFound(str(e)) from e
        logger.warning("transcript_api failed for video_id=%s (%s); trying yt-dlp subtitles", video_id, type(e).__name__)
        result = _fetch_with_ytdlp_subs(video_id, language)

    segments = clean_segments(result["segments"])
    text = segments_to_text(segments)
    if not text:
        raise CaptionsUnavailable("Transcript empty after cleaning")

    return {**result, "segments": segments, "text": text}
