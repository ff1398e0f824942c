import os
from dataclasses import dataclass

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


@dataclass(frozen=True)
class YouTubeSettings:
    # Optional: proxy URL, e.g. http://127.0.0.1:7890
    proxy_url: str | None = os.getenv("YOUTUBE_PROXY_URL")

    # Preferred caption language; empty means "first available track"
    language: str | None = os.getenv("YOUTUBE_LANGUAGE") or None

    # yt-dlp is used for metadata and as a subtitle fallback
    ytdlp_bin: str = os.getenv("YTDLP_BIN", "yt-dlp")
    metadata_timeout_sec: float = float(os.getenv("YOUTUBE_METADATA_TIMEOUT_SEC", "10"))
    subtitles_timeout_sec: float = float(
        os.getenv("YOUTUBE_SUBTITLES_TIMEOUT_SEC", os.getenv("EXTRACTION_TIMEOUT_SEC", "10"))
    )

    # Whether to try yt-dlp subtitles if transcript_api is blocked
    enable_ytdlp_fallback: bool = os.getenv("YOUTUBE_ENABLE_YTDLP_FALLBACK", "1") == "1"


youtube_settings = YouTubeSettings()
