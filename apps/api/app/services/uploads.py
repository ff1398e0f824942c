from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from app.core.config import settings
from app.services.errors import ExtractionError

logger = logging.getLogger(__name__)


@contextmanager
def staged_upload(stream: BinaryIO, suffix: str = "") -> Iterator[Path]:
    """
    Copy an upload stream into a temp file and yield its path.
    The file is removed on every exit path, including exceptions.
    """
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix="upload_", suffix=suffix, dir=settings.upload_dir)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(stream, out)
        yield path
    finally:
        path.unlink(missing_ok=True)


def read_uploaded_text(stream: BinaryIO, filename: str | None, content_type: str | None) -> str:
    mimetype = (content_type or "").lower()
    suffix = Path(filename or "").suffix.lower()

    if "pdf" in mimetype or suffix == ".pdf":
        raise ExtractionError("PDF processing not yet implemented. Please copy and paste the text content.")
    if not mimetype.startswith("text/") and suffix not in (".txt", ".md"):
        raise ExtractionError("Only PDF and TXT files are supported")

    with staged_upload(stream, suffix=suffix) as path:
        size = path.stat().st_size
        if size > settings.upload_max_bytes:
            raise ExtractionError(f"File is too large ({size:,} bytes). Please upload a smaller text file.")
        text = path.read_text(encoding="utf-8", errors="replace")

    logger.info("Read uploaded file %s (%d chars)", filename, len(text))
    return text
