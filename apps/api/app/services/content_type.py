from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union


class ContentType(str, Enum):
    TEXT = "text"
    URL = "url"
    YOUTUBE = "youtube"


@dataclass(frozen=True)
class TextInput:
    text: str

    @property
    def content_type(self) -> ContentType:
        return ContentType.TEXT


@dataclass(frozen=True)
class UrlInput:
    url: str

    @property
    def content_type(self) -> ContentType:
        return ContentType.URL


@dataclass(frozen=True)
class YouTubeInput:
    url: str
    video_id: str

    @property
    def content_type(self) -> ContentType:
        return ContentType.YOUTUBE


DetectedInput = Union[TextInput, UrlInput, YouTubeInput]


# watch?v=ID, youtu.be/ID, embed/ID, shorts/ID anywhere in the input
YOUTUBE_URL_RE = re.compile(
    r"(?:youtube\.com/watch\?(?:[^\s#]*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)"
    r"([a-zA-Z0-9_-]+)",
    re.IGNORECASE,
)
_HTTP_URL_RE = re.compile(r"^https?://.+", re.IGNORECASE)


def find_youtube_video_id(value: str) -> str | None:
    m = YOUTUBE_URL_RE.search(value or "")
    return m.group(1) if m else None


def _match_youtube(value: str) -> DetectedInput | None:
    video_id = find_youtube_video_id(value)
    if not video_id:
        return None
    return YouTubeInput(url=value, video_id=video_id)


def _match_url(value: str) -> DetectedInput | None:
    if not _HTTP_URL_RE.match(value):
        return None
    return UrlInput(url=value)


# Evaluated in order; YouTube links also look like generic URLs.
MATCHERS: list[tuple[str, Callable[[str], DetectedInput | None]]] = [
    ("youtube", _match_youtube),
    ("url", _match_url),
]


def detect(raw: str) -> DetectedInput:
    value = (raw or "").strip()
    for _name, matcher in MATCHERS:
        found = matcher(value)
        if found is not None:
            return found
    return TextInput(text=value)


def detect_content_type(raw: str) -> ContentType:
    return detect(raw).content_type
