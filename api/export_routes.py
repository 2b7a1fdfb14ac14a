"""
Document export routes
"""
import logging
import re

from fastapi import HTTPException, Response

from models import ExportFormat, ExportRequest
from services.exporters import export_document

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(name: str, export_format: ExportFormat) -> str:
    """Download name with a fixed extension and no path or header characters"""
    stem = _UNSAFE_FILENAME_RE.sub("_", (name or "").strip()).strip("._") or "document"
    return f"{stem[:100]}.{export_format.value}"


def export_document_endpoint(export_format: ExportFormat, request: ExportRequest) -> Response:
    """Export the editor HTML as PDF, DOCX or Word HTML"""
    try:
        data, media_type = export_document(export_format, request.html, request.title)
    except Exception as e:
        logger.error(f"Error exporting {export_format.value}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Could not export {export_format.value.upper()}. Please try again."
        )

    filename = safe_filename(request.filename or "document", export_format)
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
