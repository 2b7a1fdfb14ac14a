"""Tests for turning uploaded files into source material."""
import io

import pytest
from docx import Document
from httpx import AsyncClient
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from services import context_extractor
from services.context_extractor import (
    UploadTooLarge,
    docx_to_html,
    extract_context,
    extract_file,
    read_upload,
)


def _docx_bytes():
    document = Document()
    document.add_heading("Orbital Debris", level=0)
    document.add_heading("Sources", level=2)
    document.add_paragraph("")
    document.add_paragraph("Fragments <1 cm & larger")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _pdf_bytes(text):
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.drawString(72, 750, text)
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def test_docx_to_html_maps_headings_and_escapes_text():
    assert docx_to_html(_docx_bytes()) == (
        "<h1>Orbital Debris</h1><h2>Sources</h2><p>Fragments &lt;1 cm &amp; larger</p>"
    )


def test_plain_text_is_decoded_leniently():
    kind, text = extract_file("notes.md", "text/markdown", "Delta-v Δ".encode("utf-8") + b"\xff")
    assert kind == "text"
    assert text.startswith("Delta-v Δ")
    assert text.endswith("�")


def test_pdf_text_is_extracted():
    kind, text = extract_file("paper.pdf", "application/octet-stream", _pdf_bytes("Kessler syndrome"))
    assert kind == "pdf"
    assert "Kessler syndrome" in text


def test_images_are_described(fake_llm):
    fake_llm("A chart of debris density by altitude.")

    result = extract_context([("chart.jpg", "image/jpeg", b"\xff\xd8fake")])

    assert result.content == "A chart of debris density by altitude."
    assert result.sources[0].kind == "image"
    assert result.sources[0].characters == len(result.content)


def test_oversized_upload_is_rejected(monkeypatch):
    monkeypatch.setattr(context_extractor, "MAX_UPLOAD_BYTES", 4)

    with pytest.raises(UploadTooLarge):
        extract_file("big.txt", "text/plain", b"12345")


@pytest.mark.asyncio
async def test_extract_endpoint_reports_oversized_upload(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(context_extractor, "MAX_UPLOAD_BYTES", 4)

    resp = await client.post(
        "/api/context/extract",
        files=[("files", ("big.txt", b"12345", "text/plain"))],
    )

    assert resp.status_code == 413


def test_read_upload_stops_past_the_limit(monkeypatch):
    monkeypatch.setattr(context_extractor, "MAX_UPLOAD_BYTES", 4)
    stream = io.BytesIO(b"0123456789")

    with pytest.raises(UploadTooLarge):
        read_upload(stream, "big.bin")
    assert stream.tell() == 5

    assert read_upload(io.BytesIO(b"1234"), "ok.txt") == b"1234"


@pytest.mark.parametrize("filename", ["broken.docx", "broken.pdf"])
def test_corrupt_documents_raise_value_error(filename):
    with pytest.raises(ValueError, match=f"{filename} could not be read"):
        extract_file(filename, "application/octet-stream", b"not a pdf")


@pytest.mark.asyncio
@pytest.mark.parametrize("filename, content_type", [
    ("a.pdf", "application/pdf"),
    ("a.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
])
async def test_extract_endpoint_rejects_corrupt_documents(client: AsyncClient, filename, content_type):
    resp = await client.post(
        "/api/context/extract",
        files=[("files", (filename, b"not a pdf", content_type))],
    )

    assert resp.status_code == 400
    assert resp.json()["detail"].startswith(f"{filename} could not be read")
