"""
Source material extraction for uploaded files
Turns .docx, .pdf, images and plain text into context for content generation
"""
import io
import logging
from html import escape
from typing import BinaryIO, List, Tuple
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf.errors import PyPdfError

from config import MAX_UPLOAD_BYTES
from models import ContextExtractionResponse, ExtractedSource
from services.image_analyzer import analyze_image
from services.web_search import extract_pdf_text

logger = logging.getLogger(__name__)


class UploadTooLarge(ValueError):
    """Raised when an upload exceeds MAX_UPLOAD_BYTES"""


def docx_to_html(data: bytes) -> str:
    """Convert a .docx to simple HTML: Heading N styles become <hN>, the rest <p>"""
    document = Document(io.BytesIO(data))
    parts = []
    for paragraph in document.paragraphs:
        text = paragraph.text.strip()
        if not text:
            continue
        style_name = paragraph.style.name if paragraph.style is not None else ""
        level = _heading_level(style_name)
        if level:
            parts.append(f"<h{level}>{escape(text)}</h{level}>")
        else:
            parts.append(f"<p>{escape(text)}</p>")
    return "".join(parts)


def _heading_level(style_name: str) -> int:
    if style_name == "Title":
        return 1
    if style_name.startswith("Heading "):
        suffix = style_name[len("Heading "):]
        if suffix.isdigit():
            return min(max(int(suffix), 1), 6)
    return 0


def read_upload(stream: BinaryIO, filename: str) -> bytes:
    """Read at most one byte past the limit so oversized uploads are not buffered whole"""
    data = stream.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise UploadTooLarge(f"{filename} exceeds the {MAX_UPLOAD_BYTES} byte upload limit")
    return data


def extract_file(filename: str, content_type: str, data: bytes) -> Tuple[str, str]:
    """
    Return (kind, text) for a single upload
    Unreadable .docx or .pdf files raise ValueError
    """
    if len(data) > MAX_UPLOAD_BYTES:
        raise UploadTooLarge(f"{filename} exceeds the {MAX_UPLOAD_BYTES} byte upload limit")

    name = (filename or "").lower()
    content_type = content_type or ""

    if content_type.startswith("image/"):
        return "image", analyze_image(data, content_type)
    if name.endswith(".docx"):
        try:
            return "docx", docx_to_html(data)
        except (BadZipFile, PackageNotFoundError) as e:
            raise ValueError(f"{filename} could not be read: {e}") from e
    if name.endswith(".pdf") or content_type == "application/pdf":
        try:
            return "pdf", extract_pdf_text(data)
        except PyPdfError as e:
            raise ValueError(f"{filename} could not be read: {e}") from e
    return "text", data.decode("utf-8", errors="replace")


def extract_context(files: List[Tuple[str, str, bytes]]) -> ContextExtractionResponse:
    """
    Extract every upload and join the results with a blank line
    Each entry in files is (filename, content_type, data)
    """
    contents = []
    sources = []
    for filename, content_type, data in files:
        kind, text = extract_file(filename, content_type, data)
        logger.info(f"Extracted {len(text)} chars from {filename} ({kind})")
        contents.append(text)
        sources.append(ExtractedSource(filename=filename, kind=kind, characters=len(text)))

    return ContextExtractionResponse(content="\n\n".join(contents), sources=sources)
