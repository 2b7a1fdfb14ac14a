"""Tests for the flow, upload and health endpoints."""
import io

import pytest
from docx import Document
from httpx import AsyncClient

from tests.conftest import as_json


@pytest.mark.asyncio
async def test_health_returns_200(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_editor_page_is_served(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert 'id="editor"' in resp.text


@pytest.mark.asyncio
async def test_editor_serializes_selection_formulas_from_live_document(client: AsyncClient):
    page = (await client.get("/")).text
    assert "function serializeRange(range)" in page
    assert "range.intersectsNode(node)" in page
    assert "serializeHtml(holder)" not in page


@pytest.mark.asyncio
async def test_generate_document_content(client: AsyncClient, fake_llm):
    fake_llm(as_json({
        "document_content": "<h2>Lunar bases</h2><p>Regolith shielding.</p>",
        "presentation_slides": [{"title": "Why the Moon", "bullet_points": ["Proximity"]}],
        "timeline_events": [{"date": "1969", "description": "Apollo 11"}],
    }))

    resp = await client.post("/api/flows/generate-document-content", json={"topic": "Lunar bases"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["document_content"].startswith("<h2>Lunar bases</h2>")
    assert data["presentation_slides"][0]["title"] == "Why the Moon"
    assert data["timeline_events"] == [{"date": "1969", "description": "Apollo 11"}]


@pytest.mark.asyncio
async def test_generate_requires_topic(client: AsyncClient):
    resp = await client.post("/api/flows/generate-document-content", json={"topic": ""})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_flow_failure_returns_500(client: AsyncClient, fake_llm):
    fake_llm("this is not json at all")

    resp = await client.post("/api/flows/generate-document-content", json={"topic": "Comets"})

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Error generating document content")


@pytest.mark.asyncio
async def test_auto_format_document(client: AsyncClient, fake_llm):
    calls = fake_llm(as_json({"formatted_document": "<h1>Title</h1><p>[1] Ref.</p>"}))

    resp = await client.post(
        "/api/flows/auto-format-document",
        json={"document_content": "<h1>Title</h1>", "style_guide": "IEEE"},
    )

    assert resp.status_code == 200
    assert resp.json() == {"formatted_document": "<h1>Title</h1><p>[1] Ref.</p>"}
    assert "IEEE" in calls.calls[0]["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_auto_format_rejects_unknown_style_guide(client: AsyncClient):
    resp = await client.post(
        "/api/flows/auto-format-document",
        json={"document_content": "<p>x</p>", "style_guide": "MLA"},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_enhance_with_custom_prompt(client: AsyncClient, fake_llm):
    calls = fake_llm(as_json({"enhanced_document_content": "<p>Roses are red</p>"}))

    resp = await client.post(
        "/api/flows/enhance-document",
        json={"document_content": "<p>flowers</p>", "action": {"type": "custom", "prompt": "Make it rhyme"}},
    )

    assert resp.status_code == 200
    assert resp.json()["enhanced_document_content"] == "<p>Roses are red</p>"
    assert "Fulfill the following user-written instruction: 'Make it rhyme'." in calls.calls[0]["messages"][-1]["content"]


@pytest.mark.asyncio
async def test_enhance_rejects_unknown_predefined_action(client: AsyncClient):
    resp = await client.post(
        "/api/flows/enhance-document",
        json={"document_content": "<p>x</p>", "action": {"type": "predefined", "value": "translate"}},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_enhance_rejects_blank_custom_prompt(client: AsyncClient):
    resp = await client.post(
        "/api/flows/enhance-document",
        json={"document_content": "<p>x</p>", "action": {"type": "custom", "prompt": "   "}},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_generate_concept_map(client: AsyncClient, fake_llm):
    fake_llm(as_json({
        "nodes": [
            {"id": "a", "position": {"x": 0, "y": 0}, "data": {"label": "Orbit"}},
            {"id": "b", "position": {"x": 200, "y": 0}, "data": {"label": "Gravity"}},
        ],
        "edges": [{"id": "ab", "source": "a", "target": "b"}],
    }))

    resp = await client.post("/api/flows/generate-concept-map", json={"document_content": "<p>Orbits</p>"})

    assert resp.status_code == 200
    assert resp.json()["edges"] == [{"id": "ab", "source": "a", "target": "b"}]


@pytest.mark.asyncio
async def test_analyze_image_without_file(client: AsyncClient):
    resp = await client.post("/api/analyze-image")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No file uploaded"


@pytest.mark.asyncio
async def test_analyze_image(client: AsyncClient, fake_llm):
    calls = fake_llm("A diagram of the solar system with labelled planets.")

    resp = await client.post(
        "/api/analyze-image",
        files={"file": ("planets.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
    )

    assert resp.status_code == 200
    assert resp.json()["description"].startswith("A diagram of the solar system")
    image_part = calls.calls[0]["messages"][0]["content"][1]
    assert image_part["image_url"]["url"].startswith("data:image/png;base64,")


@pytest.mark.asyncio
async def test_analyze_image_rejects_non_images(client: AsyncClient):
    resp = await client.post(
        "/api/analyze-image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_extract_context_from_text_and_docx(client: AsyncClient):
    document = Document()
    document.add_heading("Mission Brief", level=1)
    document.add_paragraph("Launch window opens in May.")
    buffer = io.BytesIO()
    document.save(buffer)

    resp = await client.post(
        "/api/context/extract",
        files=[
            ("files", ("notes.txt", b"Budget: 2 billion", "text/plain")),
            ("files", ("brief.docx", buffer.getvalue(),
                       "application/vnd.openxmlformats-officedocument.wordprocessingml.document")),
        ],
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == "Budget: 2 billion\n\n<h1>Mission Brief</h1><p>Launch window opens in May.</p>"
    assert [source["kind"] for source in data["sources"]] == ["text", "docx"]
