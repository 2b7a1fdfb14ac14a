"""
Enhance document flow
Applies a predefined or user-written instruction to a piece of text
"""
from typing import Any, Dict, Union

from .base import BaseFlow
from models import (
    CustomEnhancementAction,
    EnhanceDocumentResponse,
    PredefinedEnhancementAction,
)
from prompts import (
    CUSTOM_ENHANCEMENT_TEMPLATE,
    ENHANCE_SYSTEM_PROMPT,
    ENHANCE_USER_TEMPLATE,
    PREDEFINED_ENHANCEMENT_TEMPLATE,
)
from utils.response_parser import require_non_empty_html, validate_flow_output


def build_final_prompt(action: Union[PredefinedEnhancementAction, CustomEnhancementAction]) -> str:
    """Turn an enhancement action into the instruction sent to the model"""
    if isinstance(action, PredefinedEnhancementAction):
        return PREDEFINED_ENHANCEMENT_TEMPLATE.format(value=action.value.value)
    return CUSTOM_ENHANCEMENT_TEMPLATE.format(prompt=action.prompt.strip())


class EnhanceDocumentFlow(BaseFlow):
    """
    Flow for improving, summarizing, expanding or re-toning text
    """

    name = "enhanceDocumentFlow"

    def __init__(
        self,
        document_content: str,
        action: Union[PredefinedEnhancementAction, CustomEnhancementAction]
    ):
        super().__init__()
        self.document_content = document_content
        self.action = action
        self.final_prompt = build_final_prompt(action)

    def describe(self) -> str:
        return f"{self.name}: {self.final_prompt[:100]}"

    def get_system_prompt(self) -> str:
        return ENHANCE_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        return ENHANCE_USER_TEMPLATE.format(
            final_prompt=self.final_prompt,
            document_content=self.document_content
        )

    def validate_response(self, result: Dict[str, Any]) -> EnhanceDocumentResponse:
        output = validate_flow_output(EnhanceDocumentResponse, result)
        output.enhanced_document_content = require_non_empty_html(
            output.enhanced_document_content, "enhanced_document_content"
        )
        return output
