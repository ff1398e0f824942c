from __future__ import annotations

import re
from dataclasses import dataclass

from app.core.extraction_settings import extraction_settings


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: str | None = None
    security: bool = False


VALID = ValidationResult(is_valid=True)

DANGEROUS_PATTERNS = [
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
    re.compile(r"eval\s*\(", re.IGNORECASE),
    re.compile(r"document\.write", re.IGNORECASE),
]


def validate_content(content: str, *, max_chars: int | None = None) -> ValidationResult:
    limit = max_chars if max_chars is not None else extraction_settings.max_content_chars

    if not content or not content.strip():
        return ValidationResult(is_valid=False, error="Content cannot be empty")

    if len(content) > limit:
        return ValidationResult(is_valid=False, error=f"Content must be less than {limit:,} characters")

    return VALID


def validate_secure_content(content: str) -> ValidationResult:
    """
    Reject content that still looks executable after sanitization.
    Hard stop: nothing is stripped here.
    """
    if not content:
        return ValidationResult(is_valid=False, error="Content cannot be empty")

    for pattern in DANGEROUS_PATTERNS:
        if pattern.search(content):
            return ValidationResult(
                is_valid=False,
                error="Content contains potentially dangerous code that has been filtered for security",
                security=True,
            )

    return VALID


def validate(content: str) -> ValidationResult:
    result = validate_content(content)
    if not result.is_valid:
        return result
    return validate_secure_content(content)
