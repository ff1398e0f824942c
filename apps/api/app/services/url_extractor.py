from __future__ import annotations

import logging
import re
import time

import httpx
from bs4 import BeautifulSoup, Tag

from app.core.extraction_settings import extraction_settings
from app.services.errors import PASTE_HINT, ExtractionError

logger = logging.getLogger(__name__)


# Non-content elements removed before any selector runs.
BOILERPLATE_SELECTORS = [
    "script",
    "style",
    "noscript",
    "iframe",
    "form",
    "nav",
    "header",
    "footer",
    "aside",
    "[role='navigation']",
    "[role='banner']",
    "[role='contentinfo']",
    "[role='complementary']",
    ".advertisement",
    ".ads",
    ".ad",
    ".sidebar",
    ".social-share",
    ".share-buttons",
    ".comments",
    "#comments",
    ".cookie-banner",
    ".newsletter",
]

# Tried in order; the first one with enough text wins.
CONTENT_SELECTORS = [
    "article",
    "[role='main']",
    "main",
    ".post-content",
    ".entry-content",
    ".article-content",
    ".article-body",
    ".story-body",
    ".post-body",
    "#content",
    ".content",
    ".post",
]

_BLOCK_TAGS = [
    "p", "div", "section", "article", "main", "li", "ul", "ol", "br",
    "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre", "tr", "table",
    "dd", "dt", "figcaption",
]

MIN_SELECTOR_CHARS = 200
MIN_PARAGRAPH_CHARS = 50
MIN_FALLBACK_CHARS = 100
MIN_CONTENT_CHARS = 50
TRUNCATION_MARKER = "..."


def _headers() -> dict[str, str]:
    return {
        "User-Agent": extraction_settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def _read_capped(r: httpx.Response, deadline: float) -> str:
    limit = extraction_settings.max_html_bytes
    chunks: list[bytes] = []
    size = 0
    for chunk in r.iter_bytes():
        chunks.append(chunk)
        size += len(chunk)
        if size >= limit:
            logger.info("Stopped reading %s at %d bytes", r.url, limit)
            break
        if time.monotonic() >= deadline:
            raise httpx.ReadTimeout("Page body not received in time", request=r.request)
    body = b"".join(chunks)[:limit]
    return body.decode(r.encoding or "utf-8", errors="replace")


def fetch_html(url: str, *, client: httpx.Client | None = None) -> str:
    """
    GET the page, following redirects. Raises httpx errors as-is.

    The body is streamed under one overall deadline and cut at
    max_html_bytes.
    """
    deadline = time.monotonic() + extraction_settings.timeout_sec

    if client is not None:
        with client.stream("GET", url, headers=_headers(), follow_redirects=True) as r:
            r.raise_for_status()
            return _read_capped(r, deadline)

    with httpx.Client(timeout=extraction_settings.timeout_sec, follow_redirects=True) as c:
        with c.stream("GET", url, headers=_headers()) as r:
            r.raise_for_status()
            return _read_capped(r, deadline)


def normalize_whitespace(text: str) -> str:
    lines = [re.sub(r"[ \t\r\f\v\u00a0]+", " ", line).strip() for line in (text or "").split("\n")]
    joined = "\n".join(lines)
    joined = re.sub(r"\n{3,}", "\n\n", joined)
    return joined.strip()


def _element_text(el: Tag) -> str:
    # Line breaks after block elements so paragraphs survive get_text()
    for block in el.find_all(_BLOCK_TAGS):
        block.insert_after("\n")
    return normalize_whitespace(el.get_text())


def _strip_boilerplate(soup: BeautifulSoup) -> None:
    for selector in BOILERPLATE_SELECTORS:
        for el in soup.select(selector):
            if not el.decomposed:
                el.decompose()


def extract_main_text(html: str) -> str:
    """
    Pull the readable body out of an HTML page.

    Order: content selectors -> long <p> texts -> whole body. The body
    fallback can leak navigation text on pages without semantic markup.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    _strip_boilerplate(soup)

    for selector in CONTENT_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        text = _element_text(el)
        if len(text) > MIN_SELECTOR_CHARS:
            logger.debug("Content selector matched: %s (%d chars)", selector, len(text))
            return text

    paragraphs = []
    for p in soup.find_all("p"):
        ptxt = normalize_whitespace(p.get_text(" "))
        if len(ptxt) > MIN_PARAGRAPH_CHARS:
            paragraphs.append(ptxt)
    text = "\n\n".join(paragraphs)

    if len(text) < MIN_FALLBACK_CHARS:
        body = soup.body or soup
        text = _element_text(body)
        logger.debug("Falling back to body text (%d chars)", len(text))

    return text


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + TRUNCATION_MARKER


def extract_url(url: str, *, client: httpx.Client | None = None) -> str:
    logger.info("Extracting URL content: %s", url)

    try:
        html = fetch_html(url, client=client)
    except httpx.TimeoutException as e:
        logger.warning("Timeout fetching %s", url)
        raise ExtractionError(f"The website took too long to respond. {PASTE_HINT}") from e
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("HTTP %s fetching %s", status, url)
        if status in (403, 404):
            raise ExtractionError(f"The webpage is not accessible (HTTP {status}). {PASTE_HINT}") from e
        raise ExtractionError(f"Failed to extract content from URL (HTTP {status}). {PASTE_HINT}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Fetch failed for %s: %s", url, e)
        raise ExtractionError(f"Failed to extract content from URL. {PASTE_HINT}") from e

    text = extract_main_text(html)
    if len(text) < MIN_CONTENT_CHARS:
        raise ExtractionError(f"Could not extract meaningful content from this URL. {PASTE_HINT}")

    text = truncate(text, extraction_settings.max_extracted_chars)
    logger.info("Extracted %d chars from %s", len(text), url)
    return text
