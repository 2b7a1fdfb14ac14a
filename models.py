"""
Pydantic models for request/response validation
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class StyleGuide(str, Enum):
    APA = "APA"
    IEEE = "IEEE"


class PredefinedEnhancement(str, Enum):
    IMPROVE = "improve"
    SUMMARIZE = "summarize"
    EXPAND = "expand"
    TONE_ACADEMIC = "tone-academic"
    TONE_FORMAL = "tone-formal"
    TONE_CASUAL = "tone-casual"


class ExportFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"


# ---------------------------------------------------------------------------
# Generate document content
# ---------------------------------------------------------------------------

class GenerateDocumentContentRequest(BaseModel):
    topic: str = Field(..., min_length=1, description="The topic for which to generate document content")
    include_formulas: bool = Field(True, description="Whether to include mathematical formulas in the content")
    source_material: Optional[str] = Field(None, description="Text extracted from uploaded files to ground the document")


class PresentationSlide(BaseModel):
    title: str = Field(..., description="The title of the presentation slide")
    bullet_points: List[str] = Field(default_factory=list, description="Key bullet points for the slide")


class TimelineEvent(BaseModel):
    date: str = Field(..., description="Date or time period of the event (e.g. '1950s', '2023-Q4')")
    description: str = Field(..., description="A brief description of the milestone or event")


class GenerateDocumentContentResponse(BaseModel):
    document_content: str = Field(..., description="Generated document content as a single HTML string")
    presentation_slides: List[PresentationSlide] = Field(default_factory=list)
    timeline_events: List[TimelineEvent] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Auto format
# ---------------------------------------------------------------------------

class AutoFormatDocumentRequest(BaseModel):
    document_content: str = Field(..., min_length=1, description="HTML content of the document to be formatted")
    style_guide: StyleGuide = Field(..., description="Style guide to apply")


class AutoFormatDocumentResponse(BaseModel):
    formatted_document: str = Field(..., description="The formatted document as a single HTML string")


# ---------------------------------------------------------------------------
# Enhance
# ---------------------------------------------------------------------------

class PredefinedEnhancementAction(BaseModel):
    type: Literal["predefined"] = "predefined"
    value: PredefinedEnhancement


class CustomEnhancementAction(BaseModel):
    type: Literal["custom"] = "custom"
    prompt: str = Field(..., min_length=1, description="User-written instruction")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Custom prompt must not be blank")
        return value


EnhancementAction = Annotated[
    Union[PredefinedEnhancementAction, CustomEnhancementAction],
    Field(discriminator="type")
]


class EnhanceDocumentRequest(BaseModel):
    document_content: str = Field(..., min_length=1, description="The content (HTML) to be enhanced")
    action: EnhancementAction


class EnhanceDocumentResponse(BaseModel):
    enhanced_document_content: str = Field(..., description="The enhanced content as HTML")


# ---------------------------------------------------------------------------
# Concept map
# ---------------------------------------------------------------------------

class GenerateConceptMapRequest(BaseModel):
    document_content: str = Field(..., min_length=1)


class NodePosition(BaseModel):
    x: float
    y: float


class NodeData(BaseModel):
    label: str


class ConceptNode(BaseModel):
    id: str
    position: NodePosition
    data: NodeData


class ConceptEdge(BaseModel):
    id: str
    source: str
    target: str


class ConceptMapResponse(BaseModel):
    nodes: List[ConceptNode] = Field(default_factory=list)
    edges: List[ConceptEdge] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Auto researcher
# ---------------------------------------------------------------------------

class AutoResearchRequest(BaseModel):
    query: str = Field(..., min_length=1, description="The research topic or question to investigate")


class ResearchResult(BaseModel):
    title: str
    url: str
    summary: str


class AutoResearchResponse(BaseModel):
    results: List[ResearchResult] = Field(default_factory=list)
    overall_summary: str


# ---------------------------------------------------------------------------
# Uploads and export
# ---------------------------------------------------------------------------

class ImageAnalysisResponse(BaseModel):
    description: str


class ExtractedSource(BaseModel):
    filename: str
    kind: str = Field(..., description="docx, pdf, image or text")
    characters: int


class ContextExtractionResponse(BaseModel):
    content: str = Field(..., description="All extracted sources joined by a blank line")
    sources: List[ExtractedSource] = Field(default_factory=list)


class ExportRequest(BaseModel):
    html: str = Field(..., description="Editor HTML to export")
    title: Optional[str] = Field(None, description="Document title used in file metadata")
    filename: Optional[str] = Field(None, description="Download file name without extension")
