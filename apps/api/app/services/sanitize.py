from __future__ import annotations

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning


# Removed together with everything inside them.
FORBIDDEN_TAGS = [
    "script",
    "style",
    "object",
    "embed",
    "applet",
    "iframe",
    "form",
    "input",
    "button",
    "noscript",
    "template",
    "svg",
    "math",
]

_SCRIPT_BLOCK_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_PROTOCOL_RE = re.compile(r"javascript\s*:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE)
_ENCODED_SCRIPT_RE = re.compile(r"&lt;\s*script", re.IGNORECASE)
_ENCODED_ANGLE_RE = re.compile(r"&(?:lt|gt);", re.IGNORECASE)
_ANGLE_RE = re.compile(r"[<>]")


def _strip_markup(text: str) -> str:
    # Empty allow-list: keep text, drop every tag and attribute.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(text, "html.parser")

    for el in soup.find_all(FORBIDDEN_TAGS):
        if not el.decomposed:
            el.decompose()

    return soup.get_text()


def _strip_residuals(text: str) -> str:
    text = _SCRIPT_BLOCK_RE.sub("", text)
    text = _JS_PROTOCOL_RE.sub("", text)
    text = _EVENT_HANDLER_RE.sub("", text)
    text = _ENCODED_SCRIPT_RE.sub("", text)
    text = _ENCODED_ANGLE_RE.sub("", text)
    text = _ANGLE_RE.sub("", text)
    return text


def _sanitize_once(text: str) -> str:
    return _strip_residuals(_strip_markup(text)).strip()


def sanitize(text: str) -> str:
    """
    Reduce untrusted content to plain text.

    Each pass runs the HTML parser first and the regex backstop second.
    Decoding entities or removing one pattern can expose another
    ("&amp;lt;script" -> "&lt;script"), so passes repeat until the output
    stops changing: sanitize(sanitize(x)) == sanitize(x). A pass that
    changes the text always shortens it, so the loop terminates.
    """
    if not text:
        return ""

    current = text
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return current
        current = cleaned
