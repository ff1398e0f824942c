from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from app.core.config import settings
from app.services.llm import openai_client
from app.services.llm.openai_client import GenerationError

logger = logging.getLogger(__name__)


# artifact key -> generator(content, complexity_level)
GENERATORS: dict[str, Callable[[str, int], Any]] = {
    "summary": openai_client.generate_summary,
    "flashcards": openai_client.generate_flashcards,
    "quiz": openai_client.generate_quiz,
    "mind_map": openai_client.generate_mind_map,
    "learning_path": openai_client.generate_learning_path,
    "key_terms": openai_client.generate_key_terms,
    "additional_resources": openai_client.generate_additional_resources,
}


def generate_learning_materials(content: str, complexity_level: int = 3) -> dict[str, Any]:
    """
    Run every artifact generator concurrently on already-extracted text.
    Raises GenerationError naming the first artifact that failed.
    """
    kinds = list(GENERATORS)
    workers = max(1, min(settings.generation_max_workers, len(kinds)))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="generate") as pool:
        futures = {kind: pool.submit(GENERATORS[kind], content, complexity_level) for kind in kinds}

        materials: dict[str, Any] = {}
        for kind in kinds:
            try:
                materials[kind] = futures[kind].result()
            except GenerationError as e:
                logger.warning("Generation failed for %s: %s", kind, e)
                raise GenerationError(f"Failed to generate {kind.replace('_', ' ')}: {e}") from e

    logger.info("Generated %d learning materials (complexity=%s)", len(materials), complexity_level)
    return materials
