# Flows package
from .base import BaseFlow
from .runner import FlowRunner
from .generate_content import GenerateDocumentContentFlow
from .auto_format import AutoFormatDocumentFlow
from .enhance import EnhanceDocumentFlow
from .concept_map import GenerateConceptMapFlow
from .auto_researcher import auto_research

__all__ = [
    'BaseFlow',
    'FlowRunner',
    'GenerateDocumentContentFlow',
    'AutoFormatDocumentFlow',
    'EnhanceDocumentFlow',
    'GenerateConceptMapFlow',
    'auto_research'
]
