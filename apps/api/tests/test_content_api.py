from fastapi.testclient import TestClient

from app.main import app
from app.services import generation, url_extractor
from app.services.llm.openai_client import GenerationError

client = TestClient(app)

MATERIALS = {
    "summary": "Cells are the building blocks of life.",
    "flashcards": [{"question": "What is a cell?", "answer": "The basic unit of life"}],
    "quiz": [{"question": "Q", "options": ["a", "b"], "correct_answer": 0, "explanation": ""}],
    "mind_map": {"central_topic": "Cells", "branches": []},
    "learning_path": {"current_topic": "Cells", "prerequisite_topics": [], "next_topics": [], "recommended_steps": []},
    "key_terms": [],
    "additional_resources": [],
}


def _fake_generate(content, complexity_level=3):
    return MATERIALS


def test_process_text_and_fetch_it_back(monkeypatch):
    monkeypatch.setattr(generation, "generate_learning_materials", _fake_generate)

    r = client.post("/api/process-content", json={"content": "Cells are the basic unit of life.", "complexity_level": 2})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["content_type"] == "text"
    assert body["complexity_level"] == 2
    assert body["status"] == "generated"
    assert body["original_content"] == "Cells are the basic unit of life."
    assert body["flashcards"] == MATERIALS["flashcards"]

    r2 = client.get(f"/api/content/{body['id']}")
    assert r2.status_code == 200
    assert r2.json()["summary"] == MATERIALS["summary"]


def test_empty_content_is_400():
    r = client.post("/api/process-content", json={"content": "   "})
    assert r.status_code == 400
    assert r.json()["detail"] == "Content is required"


def test_script_only_content_is_400():
    r = client.post("/api/process-content", json={"content": "<script>alert(1)</script>"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Content cannot be empty"


def test_complexity_out_of_range_is_422():
    r = client.post("/api/process-content", json={"content": "Some text", "complexity_level": 9})
    assert r.status_code == 422


def test_extraction_failure_is_400(monkeypatch):
    from app.services.errors import ExtractionError

    def boom(url):
        raise ExtractionError("The website took too long to respond.")

    monkeypatch.setattr(url_extractor, "extract_url", boom)

    r = client.post("/api/process-content", json={"content": "https://slow.example.com"})
    assert r.status_code == 400
    assert "took too long" in r.json()["detail"]


def test_generation_failure_marks_record_failed(monkeypatch):
    def broken(content, complexity_level=3):
        raise GenerationError("Failed to generate quiz: boom")

    monkeypatch.setattr(generation, "generate_learning_materials", broken)

    r = client.post("/api/process-content", json={"content": "Photosynthesis in plants."})
    assert r.status_code == 500
    body = r.json()
    assert "Failed to generate learning materials" in body["error"]
    assert body["details"] == "Failed to generate quiz: boom"

    stored = client.get(f"/api/content/{body['content_id']}").json()
    assert stored["status"] == "failed"


def test_upload_text_file(monkeypatch):
    monkeypatch.setattr(generation, "generate_learning_materials", _fake_generate)

    r = client.post(
        "/api/upload-file",
        files={"file": ("notes.txt", b"Notes about <b>osmosis</b> and diffusion.", "text/plain")},
        data={"complexity_level": "4"},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["original_content"] == "Notes about osmosis and diffusion."
    assert body["complexity_level"] == 4


def test_upload_pdf_is_400():
    r = client.post("/api/upload-file", files={"file": ("paper.pdf", b"%PDF-1.4", "application/pdf")})
    assert r.status_code == 400
    assert "PDF processing not yet implemented" in r.json()["detail"]


def test_extract_endpoint():
    r = client.post("/api/extract", json={"content": "  <p>Just some plain notes.</p> "})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "content_type": "text", "text": "Just some plain notes.", "length": 22}


def test_unknown_content_is_404():
    r = client.get("/api/content/987654")
    assert r.status_code == 404
    assert r.json()["detail"] == "Content not found"
