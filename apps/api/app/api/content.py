import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services import generation
from app.services.content_type import ContentType
from app.services.errors import ContentProcessingError
from app.services.extraction import extract_content, finalize_text
from app.services.learning_content import (
    attach_materials,
    create_learning_content,
    get_learning_content,
    serialize_learning_content,
    set_failed,
)
from app.services.llm.openai_client import GenerationError
from app.services.uploads import read_uploaded_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["content"])


class ProcessContentRequest(BaseModel):
    content: str
    complexity_level: int = Field(default=3, ge=1, le=5)


class ExtractRequest(BaseModel):
    content: str


class ExtractResponse(BaseModel):
    ok: bool
    content_type: str
    text: str
    length: int


def _generate_and_attach(db: Session, content_id: int, text: str, complexity_level: int):
    try:
        materials = generation.generate_learning_materials(text, complexity_level)
    except GenerationError as e:
        set_failed(db, content_id, str(e))
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to generate learning materials. Please check your OpenAI API key and try again.",
                "details": str(e),
                "content_id": content_id,
            },
        )

    lc = attach_materials(db, content_id, materials)
    return serialize_learning_content(lc)


@router.post("/process-content")
def process_content(req: ProcessContentRequest, db: Session = Depends(get_db)):
    if not (req.content or "").strip():
        raise HTTPException(status_code=400, detail="Content is required")

    try:
        extracted = extract_content(req.content)
    except ContentProcessingError as e:
        raise HTTPException(status_code=400, detail=e.message)

    lc = create_learning_content(
        db,
        original_content=extracted.text,
        content_type=extracted.content_type.value,
        complexity_level=req.complexity_level,
        source_url=extracted.source_url,
    )
    return _generate_and_attach(db, lc.id, extracted.text, req.complexity_level)


@router.post("/upload-file")
def upload_file(
    file: UploadFile = File(...),
    complexity_level: int = Form(default=3, ge=1, le=5),
    db: Session = Depends(get_db),
):
    try:
        raw = read_uploaded_text(file.file, file.filename, file.content_type)
        text = finalize_text(raw)
    except ContentProcessingError as e:
        raise HTTPException(status_code=400, detail=e.message)
    finally:
        file.file.close()

    lc = create_learning_content(
        db,
        original_content=text,
        content_type=ContentType.TEXT.value,
        complexity_level=complexity_level,
    )
    return _generate_and_attach(db, lc.id, text, complexity_level)


@router.post("/extract", response_model=ExtractResponse)
def extract_only(req: ExtractRequest) -> ExtractResponse:
    try:
        extracted = extract_content(req.content)
    except ContentProcessingError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return ExtractResponse(
        ok=True,
        content_type=extracted.content_type.value,
        text=extracted.text,
        length=len(extracted.text),
    )


@router.get("/content/{content_id}")
def get_content(content_id: int, db: Session = Depends(get_db)):
    lc = get_learning_content(db, content_id)
    if not lc:
        raise HTTPException(status_code=404, detail="Content not found")
    return serialize_learning_content(lc)
