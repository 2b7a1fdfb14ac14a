"""
Concept map flow
Turns document content into nodes and edges for a graph view
"""
from typing import Any, Dict

from .base import BaseFlow
from models import ConceptMapResponse
from prompts import CONCEPT_MAP_SYSTEM_PROMPT, CONCEPT_MAP_USER_TEMPLATE
from utils.response_parser import validate_flow_output


class GenerateConceptMapFlow(BaseFlow):
    """
    Flow for extracting concepts and their relationships
    """

    name = "generateConceptMapFlow"

    def __init__(self, document_content: str):
        super().__init__()
        self.document_content = document_content

    def get_system_prompt(self) -> str:
        return CONCEPT_MAP_SYSTEM_PROMPT

    def build_user_message(self) -> str:
        return CONCEPT_MAP_USER_TEMPLATE.format(document_content=self.document_content)

    def validate_response(self, result: Dict[str, Any]) -> ConceptMapResponse:
        output = validate_flow_output(ConceptMapResponse, result)

        if not output.nodes:
            raise ValueError("Concept map must have at least one node")

        node_ids = set()
        for node in output.nodes:
            if node.id in node_ids:
                raise ValueError(f"Duplicate node id in concept map: {node.id}")
            node_ids.add(node.id)

        edges = []
        edge_ids = set()
        for edge in output.edges:
            if edge.source not in node_ids or edge.target not in node_ids:
                self.logger.warning(
                    f"Dropping edge {edge.id}: {edge.source} -> {edge.target} references an unknown node"
                )
                continue
            if edge.id in edge_ids:
                self.logger.warning(f"Dropping edge with duplicate id {edge.id}")
                continue
            edge_ids.add(edge.id)
            edges.append(edge)
        output.edges = edges

        self.logger.info(f"Concept map has {len(output.nodes)} nodes and {len(output.edges)} edges")
        return output
