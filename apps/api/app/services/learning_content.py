import json
from typing import Any

from sqlalchemy.orm import Session

from app.models.learning_content import LearningContent


# artifact key -> column holding its JSON
_JSON_COLUMNS = {
    "flashcards": "flashcards_json",
    "quiz": "quiz_json",
    "mind_map": "mind_map_json",
    "learning_path": "learning_path_json",
    "key_terms": "key_terms_json",
    "additional_resources": "additional_resources_json",
}


def _safe_json_loads(s: str | None):
    if not s:
        return None
    try:
        return json.loads(s)
    except json.JSONDecodeError:
        return None


def create_learning_content(
    db: Session,
    original_content: str,
    content_type: str,
    complexity_level: int = 3,
    source_url: str | None = None,
) -> LearningContent:
    lc = LearningContent(
        original_content=original_content,
        content_type=content_type,
        complexity_level=complexity_level,
        source_url=source_url,
        status="created",
    )
    db.add(lc)
    db.commit()
    db.refresh(lc)
    return lc


def get_learning_content(db: Session, content_id: int) -> LearningContent | None:
    return db.query(LearningContent).filter(LearningContent.id == content_id).first()


def attach_materials(db: Session, content_id: int, materials: dict[str, Any]) -> LearningContent:
    lc = db.query(LearningContent).filter(LearningContent.id == content_id).one()
    if "summary" in materials:
        lc.summary = materials["summary"]
    for key, column in _JSON_COLUMNS.items():
        if key in materials:
            setattr(lc, column, json.dumps(materials[key], ensure_ascii=False))
    lc.status = "generated"
    lc.error = None
    db.commit()
    db.refresh(lc)
    return lc


def set_failed(db: Session, content_id: int, error: str) -> LearningContent:
    lc = db.query(LearningContent).filter(LearningContent.id == content_id).one()
    lc.status = "failed"
    lc.error = error
    db.commit()
    db.refresh(lc)
    return lc


def serialize_learning_content(lc: LearningContent) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": lc.id,
        "original_content": lc.original_content,
        "content_type": lc.content_type,
        "source_url": lc.source_url,
        "complexity_level": lc.complexity_level,
        "summary": lc.summary,
        "status": lc.status,
        "error": lc.error,
        "created_at": lc.created_at.isoformat() if lc.created_at else None,
        "updated_at": lc.updated_at.isoformat() if lc.updated_at else None,
    }
    for key, column in _JSON_COLUMNS.items():
        out[key] = _safe_json_loads(getattr(lc, column))
    return out
