"""
Auto format flow
Reformats document HTML according to a citation style guide
"""
from typing import Any, Dict

from .base import BaseFlow
from models import AutoFormatDocumentResponse, StyleGuide
from prompts import AUTO_FORMAT_SYSTEM_PROMPT, AUTO_FORMAT_USER_TEMPLATE
from utils.response_parser import require_non_empty_html, validate_flow_output


class AutoFormatDocumentFlow(BaseFlow):
    """
    Flow for applying a style guide (APA, IEEE) to a document
    """

    name = "autoFormatDocumentFlow"

    def __init__(self, document_content: str, style_guide: StyleGuide):
        super().__init__()
        self.document_content = document_content
        self.style_guide = StyleGuide(style_guide)

    def describe(self) -> str:
        return f"{self.name} with {self.style_guide.value} on {len(self.document_content)} chars"

    def get_system_prompt(self) -> str:
        return AUTO_FORMAT_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        return AUTO_FORMAT_USER_TEMPLATE.format(
            document_content=self.document_content,
            style_guide=self.style_guide.value
        )

    def validate_response(self, result: Dict[str, Any]) -> AutoFormatDocumentResponse:
        output = validate_flow_output(AutoFormatDocumentResponse, result)
        output.formatted_document = require_non_empty_html(output.formatted_document, "formatted_document")
        return output
