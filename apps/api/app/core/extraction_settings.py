import os
from dataclasses import dataclass

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class ExtractionSettings:
    # Network
    timeout_sec: float = float(os.getenv("EXTRACTION_TIMEOUT_SEC", "10"))
    user_agent: str = os.getenv("EXTRACTION_USER_AGENT", _DEFAULT_USER_AGENT)

    # Bounds: every extractor truncates to max_extracted_chars;
    # max_content_chars is the ceiling for anything handed to generation.
    max_extracted_chars: int = int(os.getenv("EXTRACTION_MAX_CHARS", "15000"))
    max_content_chars: int = int(os.getenv("CONTENT_MAX_CHARS", "20000"))

    # Page bodies are read up to this many bytes
    max_html_bytes: int = int(os.getenv("EXTRACTION_MAX_HTML_BYTES", str(2 * 1024 * 1024)))


extraction_settings = ExtractionSettings()
