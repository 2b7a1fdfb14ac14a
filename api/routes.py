"""
API routes with fail-early approach
"""
import logging
from typing import List, Optional

from fastapi import File, HTTPException, UploadFile

from models import (
    AutoFormatDocumentRequest,
    AutoFormatDocumentResponse,
    AutoResearchRequest,
    AutoResearchResponse,
    ConceptMapResponse,
    ContextExtractionResponse,
    EnhanceDocumentRequest,
    EnhanceDocumentResponse,
    GenerateConceptMapRequest,
    GenerateDocumentContentRequest,
    GenerateDocumentContentResponse,
    ImageAnalysisResponse,
)
from services import document_flows
from services.context_extractor import UploadTooLarge, extract_context, read_upload
from services.image_analyzer import analyze_image

logger = logging.getLogger(__name__)


def generate_document_content_endpoint(request: GenerateDocumentContentRequest) -> GenerateDocumentContentResponse:
    """Generate a document, presentation slides and a timeline for a topic"""
    response = document_flows.generate_document_content(
        request.topic,
        request.include_formulas,
        request.source_material
    )
    logger.info(f"Returning content package with {len(response.presentation_slides)} slides")
    return response


def auto_format_document_endpoint(request: AutoFormatDocumentRequest) -> AutoFormatDocumentResponse:
    """Reformat the document according to a style guide"""
    return document_flows.auto_format_document(request.document_content, request.style_guide)


def enhance_document_endpoint(request: EnhanceDocumentRequest) -> EnhanceDocumentResponse:
    """Apply a predefined or custom enhancement to the document or selection"""
    return document_flows.enhance_document(request.document_content, request.action)


def generate_concept_map_endpoint(request: GenerateConceptMapRequest) -> ConceptMapResponse:
    """Build a concept map of the document"""
    return document_flows.generate_concept_map(request.document_content)


def auto_research_endpoint(request: AutoResearchRequest) -> AutoResearchResponse:
    """Search, summarize and synthesize sources for a research question"""
    return document_flows.research_topic(request.query)


def analyze_image_endpoint(file: Optional[UploadFile] = File(None)) -> ImageAnalysisResponse:
    """Describe an uploaded image so it can be used as document context"""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        description = analyze_image(file.file.read(), file.content_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error analyzing image: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to analyze image. Check the server logs for details."
        )

    return ImageAnalysisResponse(description=description)


def extract_context_endpoint(files: List[UploadFile] = File(...)) -> ContextExtractionResponse:
    """Turn uploaded files into source material for content generation"""
    try:
        uploads = []
        for upload in files:
            filename = upload.filename or "upload"
            uploads.append((filename, upload.content_type or "", read_upload(upload.file, filename)))
        return extract_context(uploads)
    except UploadTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error processing uploads: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Could not process your files.")
