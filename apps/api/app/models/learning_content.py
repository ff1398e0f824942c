from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base_class import Base


class LearningContent(Base):
    __tablename__ = "learning_content"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # extracted source (immutable once written)
    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str] = mapped_column(String(16), nullable=False)  # text|url|youtube
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    complexity_level: Mapped[int] = mapped_column(Integer, nullable=False, default=3)  # 1=beginner .. 5=academic

    # generated artifacts
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    flashcards_json: Mapped[str | None] = mapped_column(Text, nullable=True)             # [{question, answer}]
    quiz_json: Mapped[str | None] = mapped_column(Text, nullable=True)                   # [{question, options, correct_answer, explanation}]
    mind_map_json: Mapped[str | None] = mapped_column(Text, nullable=True)               # {central_topic, branches}
    learning_path_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    key_terms_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_resources_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    # status
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="created")  # created|generated|failed
    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())
