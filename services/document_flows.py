"""
Document flow services with fail-early approach
Uses Strategy Pattern via the flow runner for extensibility
"""
import logging
from typing import Callable, Optional, TypeVar

from fastapi import HTTPException

from .flows import (
    AutoFormatDocumentFlow,
    EnhanceDocumentFlow,
    FlowRunner,
    GenerateConceptMapFlow,
    GenerateDocumentContentFlow,
    auto_research,
)
from .web_search import WebSearchClient, WebSearchNotConfigured
from models import (
    AutoFormatDocumentResponse,
    AutoResearchResponse,
    ConceptMapResponse,
    EnhanceDocumentResponse,
    GenerateDocumentContentResponse,
    StyleGuide,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run(operation: str, call: Callable[[], T]) -> T:
    """Run a flow and convert unexpected failures into HTTP 500 errors"""
    try:
        return call()
    except HTTPException:
        raise
    except WebSearchNotConfigured as e:
        logger.warning(f"Error {operation}: {str(e)}")
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Error {operation}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error {operation}: {str(e)}"
        )


def generate_document_content(
    topic: str,
    include_formulas: bool = True,
    source_material: Optional[str] = None
) -> GenerateDocumentContentResponse:
    """Generate the document, slides and timeline for a topic"""
    flow = GenerateDocumentContentFlow(topic, include_formulas, source_material)
    return _run("generating document content", lambda: FlowRunner.run(flow))


def auto_format_document(document_content: str, style_guide: StyleGuide) -> AutoFormatDocumentResponse:
    """Apply a style guide to the document HTML"""
    flow = AutoFormatDocumentFlow(document_content, style_guide)
    return _run("formatting document", lambda: FlowRunner.run(flow))


def enhance_document(document_content: str, action) -> EnhanceDocumentResponse:
    """Apply an enhancement action to the document or selection HTML"""
    flow = EnhanceDocumentFlow(document_content, action)
    return _run("enhancing document", lambda: FlowRunner.run(flow))


def generate_concept_map(document_content: str) -> ConceptMapResponse:
    """Build a concept map from the document"""
    flow = GenerateConceptMapFlow(document_content)
    return _run("generating concept map", lambda: FlowRunner.run(flow))


def research_topic(query: str, search: Optional[WebSearchClient] = None) -> AutoResearchResponse:
    """Run the auto researcher for a query"""
    owns_search = search is None
    search = search or WebSearchClient()
    try:
        return _run("researching topic", lambda: auto_research(query, search))
    finally:
        if owns_search:
            search.close()
