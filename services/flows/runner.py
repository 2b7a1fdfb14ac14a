"""
Runner that executes flows against Azure OpenAI
Handles the API call and response parsing
"""
import logging
from typing import Any, Dict, List

from pydantic import BaseModel

from .base import BaseFlow
from openai_client import get_client
from config import MODEL_NAME, MAX_COMPLETION_TOKENS
from prompts import JSON_ONLY_REMINDER
from utils.response_parser import parse_json_response

logger = logging.getLogger(__name__)


class FlowRunner:
    """
    Executes a flow: build messages, call the model, parse and validate the answer
    """

    @staticmethod
    def _call_openai(messages: List[Dict[str, Any]]) -> str:
        """Call OpenAI API and return response content"""
        client = get_client()
        try:
            response = client.chat.completions.create(
                model=MODEL_NAME,
                messages=messages,
                response_format={"type": "json_object"},
                max_completion_tokens=MAX_COMPLETION_TOKENS
            )
        except Exception as e:
            # Fallback if response_format is not supported
            if "response_format" not in str(e).lower():
                raise

            logger.warning("Deployment rejected response_format, retrying with a JSON-only instruction")
            retry_messages = messages[:-1] + [{
                "role": "user",
                "content": messages[-1]["content"] + JSON_ONLY_REMINDER
            }]
            response = client.chat.completions.create(
                model=MODEL_NAME,
                messages=retry_messages,
                max_completion_tokens=MAX_COMPLETION_TOKENS
            )

        if not response.choices or not response.choices[0].message.content:
            raise ValueError("Empty response from OpenAI")

        return response.choices[0].message.content.strip()

    @staticmethod
    def run(flow: BaseFlow) -> BaseModel:
        """
        Run a flow end to end
        This is the main entry point for every prompt flow
        """
        logger.info(f"Running {flow.describe()}")

        messages = flow.build_messages()

        content = FlowRunner._call_openai(messages)
        logger.info(f"Raw AI response (first 500 chars): {content[:500]}")

        result = parse_json_response(content)
        logger.info(f"Parsed JSON keys: {list(result.keys())}")

        return flow.validate_response(result)
