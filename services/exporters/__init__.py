# Exporters package
from typing import Optional, Tuple

from models import ExportFormat
from .pdf_exporter import export_pdf
from .word_exporter import export_docx, export_word_html

MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.DOC: "application/vnd.ms-word",
}

_EXPORTERS = {
    ExportFormat.PDF: export_pdf,
    ExportFormat.DOCX: export_docx,
    ExportFormat.DOC: export_word_html,
}


def export_document(export_format: ExportFormat, html: str, title: Optional[str] = None) -> Tuple[bytes, str]:
    """Return (file bytes, media type) for the requested format"""
    data = _EXPORTERS[export_format](html, title)
    return data, MEDIA_TYPES[export_format]


__all__ = [
    'MEDIA_TYPES',
    'export_document',
    'export_pdf',
    'export_docx',
    'export_word_html'
]
