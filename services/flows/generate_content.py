"""
Generate document content flow
Produces the document HTML, presentation slides and a timeline for a topic
"""
from typing import Any, Dict, Optional

from .base import BaseFlow
from models import GenerateDocumentContentResponse
from prompts import (
    FORMULA_INSTRUCTION,
    GENERATE_DOCUMENT_CONTENT_INSTRUCTIONS,
    GENERATE_DOCUMENT_CONTENT_SYSTEM_PROMPT,
)
from utils.response_parser import require_non_empty_html, validate_flow_output

# Keeps the prompt inside the deployment's context window
SOURCE_MATERIAL_LIMIT = 20000


class GenerateDocumentContentFlow(BaseFlow):
    """
    Flow for generating a full content package from a topic
    """

    name = "generateDocumentContentFlow"

    def __init__(
        self,
        topic: str,
        include_formulas: bool = True,
        source_material: Optional[str] = None
    ):
        super().__init__()
        self.topic = topic.strip()
        self.include_formulas = include_formulas
        self.source_material = (source_material or "").strip()

    def describe(self) -> str:
        return f"{self.name} for topic: {self.topic[:100]}..."

    def get_system_prompt(self) -> str:
        return GENERATE_DOCUMENT_CONTENT_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        user_message = f"**Topic:** {self.topic}\n\n"

        if self.source_material:
            material = self.source_material
            if len(material) > SOURCE_MATERIAL_LIMIT:
                self.logger.info(
                    f"Truncating source material from {len(material)} to {SOURCE_MATERIAL_LIMIT} chars"
                )
                material = material[:SOURCE_MATERIAL_LIMIT]
            user_message += "**Source material provided by the user (ground the document in it):**\n"
            user_message += material
            user_message += "\n\n"

        formula_instruction = FORMULA_INSTRUCTION if self.include_formulas else ""
        user_message += GENERATE_DOCUMENT_CONTENT_INSTRUCTIONS.format(
            formula_instruction=formula_instruction
        )
        return user_message

    def validate_response(self, result: Dict[str, Any]) -> GenerateDocumentContentResponse:
        if "document_content" not in result:
            raise ValueError("Response missing 'document_content' field")

        output = validate_flow_output(GenerateDocumentContentResponse, result)
        output.document_content = require_non_empty_html(output.document_content, "document_content")

        self.logger.info(
            f"Generated {len(output.document_content)} chars of HTML, "
            f"{len(output.presentation_slides)} slides, {len(output.timeline_events)} timeline events"
        )
        return output
