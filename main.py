"""
Main FastAPI application entry point
Serves the editor page and the document flow API
"""
import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from config import ALLOWED_ORIGINS, MODEL_NAME
from api.routes import (
    analyze_image_endpoint,
    auto_format_document_endpoint,
    auto_research_endpoint,
    enhance_document_endpoint,
    extract_context_endpoint,
    generate_concept_map_endpoint,
    generate_document_content_endpoint,
)
from api.export_routes import export_document_endpoint
from models import (
    AutoFormatDocumentResponse,
    AutoResearchResponse,
    ConceptMapResponse,
    ContextExtractionResponse,
    EnhanceDocumentResponse,
    GenerateDocumentContentResponse,
    ImageAnalysisResponse,
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

# Initialize FastAPI app
app = FastAPI(title="DocuCraft API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status code and elapsed time for API calls"""
    started = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - started) * 1000, 2)

    if request.url.path.startswith("/api/"):
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)")

    return response


# Register routes
app.post("/api/flows/generate-document-content", response_model=GenerateDocumentContentResponse)(
    generate_document_content_endpoint
)
app.post("/api/flows/auto-format-document", response_model=AutoFormatDocumentResponse)(
    auto_format_document_endpoint
)
app.post("/api/flows/enhance-document", response_model=EnhanceDocumentResponse)(
    enhance_document_endpoint
)
app.post("/api/flows/generate-concept-map", response_model=ConceptMapResponse)(
    generate_concept_map_endpoint
)
app.post("/api/flows/auto-research", response_model=AutoResearchResponse)(
    auto_research_endpoint
)
app.post("/api/analyze-image", response_model=ImageAnalysisResponse)(
    analyze_image_endpoint
)
app.post("/api/context/extract", response_model=ContextExtractionResponse)(
    extract_context_endpoint
)
app.post("/api/export/{export_format}")(
    export_document_endpoint
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "model": MODEL_NAME}


@app.get("/", include_in_schema=False)
async def editor_page():
    """Single-page editor UI"""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
