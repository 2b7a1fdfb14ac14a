"""Tests for AI response parsing helpers."""
import pytest

from models import AutoFormatDocumentResponse
from utils.response_parser import (
    parse_json_response,
    require_non_empty_html,
    strip_code_fences,
    validate_flow_output,
)


def test_parses_plain_json():
    assert parse_json_response('{"formatted_document": "<p>x</p>"}') == {"formatted_document": "<p>x</p>"}


def test_parses_json_code_block():
    content = 'Here you go:\n```json\n{"summary": "short"}\n```'
    assert parse_json_response(content) == {"summary": "short"}


def test_parses_unlabelled_code_block():
    content = '```\n{"summary": "short"}\n```'
    assert parse_json_response(content) == {"summary": "short"}


def test_parses_object_surrounded_by_prose():
    content = 'Sure! {"nodes": [], "edges": []} Hope this helps.'
    assert parse_json_response(content) == {"nodes": [], "edges": []}


def test_rejects_response_without_json():
    with pytest.raises(ValueError, match="Could not find valid JSON"):
        parse_json_response("I cannot help with that.")


def test_rejects_broken_json():
    with pytest.raises(ValueError, match="Invalid JSON"):
        parse_json_response('prefix {"summary": "unterminated} suffix')


def test_rejects_top_level_array():
    with pytest.raises(ValueError, match="Expected a JSON object"):
        parse_json_response('[1, 2, 3]')


def test_strip_code_fences_removes_html_fence():
    assert strip_code_fences("```html\n<p>Hello</p>\n```") == "<p>Hello</p>"
    assert strip_code_fences("  <p>Hello</p> ") == "<p>Hello</p>"


def test_require_non_empty_html():
    assert require_non_empty_html("```\n<h2>A</h2>\n```", "document_content") == "<h2>A</h2>"
    with pytest.raises(ValueError, match="empty 'document_content'"):
        require_non_empty_html("   ", "document_content")


def test_validate_flow_output_reports_schema_errors():
    with pytest.raises(ValueError, match="AutoFormatDocumentResponse"):
        validate_flow_output(AutoFormatDocumentResponse, {"formatted": "<p>x</p>"})
