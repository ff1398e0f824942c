from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.services.llm import prompts
from app.services.llm.schemas import (
    AdditionalResource,
    Flashcard,
    KeyTerm,
    LearningPath,
    MindMap,
    QuizQuestion,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class GenerationError(Exception):
    pass


# ----------------------------
# OpenAI call helpers
# ----------------------------

def _build_openai_client():
    if not settings.openai_api_key:
        raise GenerationError("OPENAI_API_KEY is missing")

    from openai import OpenAI

    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_sec,
        max_retries=settings.openai_max_retries,
    )


def _extract_json(text: str) -> dict[str, Any]:
    """
    Best-effort JSON extraction if model returns extra text.
    """
    text = (text or "").strip()
    if not text:
        raise GenerationError("Empty response from OpenAI")

    # Fast path
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Try to find outermost JSON object
    start = text.find("{")
    end = text.rfind("}")
    if start >= 0 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass

    raise GenerationError(f"OpenAI returned non-JSON. First 200 chars: {text[:200]!r}")


def _chat(system: str, user: str, *, json_mode: bool, max_tokens: int | None = None) -> str:
    client = _build_openai_client()
    kwargs: dict[str, Any] = {
        "model": settings.openai_model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
    }
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    if max_tokens:
        kwargs["max_tokens"] = max_tokens

    from openai import OpenAIError

    try:
        chat = client.chat.completions.create(**kwargs)
    except OpenAIError as e:
        raise GenerationError(f"OpenAI request failed: {e}") from e

    return (chat.choices[0].message.content or "").strip()


def _call_json(system_template: str, user_template: str, content: str, complexity_level: int) -> dict[str, Any]:
    system = system_template.format(audience=prompts.audience(complexity_level))
    user = user_template.format(content=content)
    payload = _extract_json(_chat(system, user, json_mode=True))
    if not isinstance(payload, dict):
        raise GenerationError(f"Expected a JSON object, got {type(payload).__name__}")
    return payload


def _coerce_list(items: Any, model: type[T], kind: str) -> list[T]:
    if not isinstance(items, list):
        return []
    out: list[T] = []
    for it in items:
        try:
            out.append(model.model_validate(it))
        except ValidationError as e:
            logger.warning("Dropping malformed %s item: %s", kind, e.errors()[:1])
    return out


def _dump(items: list[BaseModel]) -> list[dict[str, Any]]:
    return [it.model_dump() for it in items]


# ----------------------------
# Public API
# ----------------------------

def generate_summary(content: str, complexity_level: int = 3) -> str:
    system = prompts.SUMMARY_SYSTEM.format(audience=prompts.audience(complexity_level))
    user = prompts.SUMMARY_USER_TEMPLATE.format(content=content)
    text = _chat(system, user, json_mode=False, max_tokens=500)
    return text or "Unable to generate summary."


def generate_flashcards(content: str, complexity_level: int = 3) -> list[dict[str, Any]]:
    payload = _call_json(prompts.FLASHCARDS_SYSTEM, prompts.FLASHCARDS_USER_TEMPLATE, content, complexity_level)
    return _dump(_coerce_list(payload.get("flashcards"), Flashcard, "flashcard"))


def generate_quiz(content: str, complexity_level: int = 3) -> list[dict[str, Any]]:
    payload = _call_json(prompts.QUIZ_SYSTEM, prompts.QUIZ_USER_TEMPLATE, content, complexity_level)
    questions = _coerce_list(payload.get("questions"), QuizQuestion, "quiz question")
    # correct_answer must point at an option
    return _dump([q for q in questions if q.correct_answer < len(q.options)])


def generate_mind_map(content: str, complexity_level: int = 3) -> dict[str, Any]:
    payload = _call_json(prompts.MIND_MAP_SYSTEM, prompts.MIND_MAP_USER_TEMPLATE, content, complexity_level)
    try:
        return MindMap.model_validate(payload).model_dump()
    except ValidationError as e:
        logger.warning("Malformed mind map payload: %s", e.errors()[:1])
        return MindMap().model_dump()


def generate_learning_path(content: str, complexity_level: int = 3) -> dict[str, Any]:
    payload = _call_json(prompts.LEARNING_PATH_SYSTEM, prompts.LEARNING_PATH_USER_TEMPLATE, content, complexity_level)
    try:
        return LearningPath.model_validate(payload).model_dump()
    except ValidationError as e:
        raise GenerationError(f"Malformed learning path payload: {e.errors()[:1]}") from e


def generate_key_terms(content: str, complexity_level: int = 3) -> list[dict[str, Any]]:
    payload = _call_json(prompts.KEY_TERMS_SYSTEM, prompts.KEY_TERMS_USER_TEMPLATE, content, complexity_level)
    return _dump(_coerce_list(payload.get("keyTerms") or payload.get("key_terms"), KeyTerm, "key term"))


def generate_additional_resources(content: str, complexity_level: int = 3) -> list[dict[str, Any]]:
    payload = _call_json(prompts.RESOURCES_SYSTEM, prompts.RESOURCES_USER_TEMPLATE, content, complexity_level)
    resources = _coerce_list(payload.get("resources"), AdditionalResource, "resource")
    return _dump([r for r in resources if r.url.startswith(("http://", "https://"))])
