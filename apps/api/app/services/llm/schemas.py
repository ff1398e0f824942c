from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Artifact(BaseModel):
    # Models answer in camelCase or snake_case; accept both.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Flashcard(_Artifact):
    question: str
    answer: str


class QuizQuestion(_Artifact):
    question: str
    options: list[str] = Field(min_length=2)
    correct_answer: int = Field(ge=0)
    explanation: str = ""


class MindMapBranch(_Artifact):
    topic: str
    subtopics: list[str] = []


class MindMap(_Artifact):
    central_topic: str = "Topic"
    branches: list[MindMapBranch] = []


class LearningStep(_Artifact):
    title: str
    description: str = ""
    estimated_time: str = ""
    difficulty: int = Field(default=3, ge=1, le=5)
    resources: list[str] = []
    completed: bool = False


class LearningPath(_Artifact):
    current_topic: str
    prerequisite_topics: list[str] = []
    next_topics: list[str] = []
    recommended_steps: list[LearningStep] = []
    skill_level: str = ""
    total_estimated_time: str = ""


class KeyTerm(_Artifact):
    term: str
    definition: str
    category: str = ""
    related_terms: list[str] = []
    examples: list[str] = []
    complexity: int = Field(default=3, ge=1, le=5)


class AdditionalResource(_Artifact):
    title: str
    type: Literal["article", "video", "book", "course", "tutorial", "documentation"] = "article"
    url: str
    description: str = ""
    difficulty: int = Field(default=3, ge=1, le=5)
    estimated_time: str | None = None
    rating: float | None = None
