"""
JSON response parsing utilities with fail-early approach
"""
import json
import logging
import re
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def parse_json_response(content: str) -> dict:
    """
    Parse JSON from AI response, handling various formats (markdown code blocks, plain JSON, etc.)
    Raises ValueError if JSON cannot be parsed
    """
    content = content.strip()

    # Try direct JSON parse first
    try:
        return _ensure_object(json.loads(content))
    except json.JSONDecodeError:
        pass

    # Try extracting from markdown code blocks
    if "```json" in content:
        json_start = content.find("```json") + 7
        json_end = content.find("```", json_start)
        if json_end > json_start:
            return _ensure_object(_loads(content[json_start:json_end].strip()))

    if "```" in content:
        json_start = content.find("```") + 3
        json_end = content.find("```", json_start)
        if json_end > json_start:
            return _ensure_object(_loads(content[json_start:json_end].strip()))

    # Try finding JSON object boundaries
    first_brace = content.find("{")
    last_brace = content.rfind("}")

    if first_brace < 0 or last_brace <= first_brace:
        raise ValueError(f"Could not find valid JSON in response: {content[:200]}")

    return _ensure_object(_loads(content[first_brace:last_brace + 1]))


def _loads(fragment: str) -> Any:
    try:
        return json.loads(fragment)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in AI response: {e}") from e


def _ensure_object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def strip_code_fences(html: str) -> str:
    """Remove a markdown fence the model sometimes wraps around HTML"""
    html = html.strip()
    match = _FENCE_RE.match(html)
    if match:
        return match.group(1).strip()
    return html


def validate_flow_output(model: Type[ModelT], result: Dict[str, Any]) -> ModelT:
    """
    Validate a parsed response against the flow's output schema
    Raises ValueError with the schema errors if validation fails
    """
    try:
        return model.model_validate(result)
    except ValidationError as e:
        logger.warning(f"{model.__name__} validation failed: {e.error_count()} error(s)")
        raise ValueError(f"AI response does not match {model.__name__}: {e}") from e


def require_non_empty_html(value: str, field: str) -> str:
    """Strip fences and reject empty HTML fields"""
    value = strip_code_fences(value or "")
    if not value:
        raise ValueError(f"AI response has an empty '{field}' field")
    return value
