"""
Base abstract class for document flows
Following Strategy Pattern for extensibility
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List
import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class BaseFlow(ABC):
    """
    Abstract base class for prompt flows
    Subclasses render one prompt template and validate the model's answer
    """

    name: str = "flow"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def get_system_prompt(self) -> str:
        """
        Get the system prompt for this flow
        Must be implemented by subclasses
        """
        pass

    @abstractmethod
    def build_user_message(self) -> str:
        """
        Build the user message for the AI prompt
        Must be implemented by subclasses
        """
        pass

    @abstractmethod
    def validate_response(self, result: Dict[str, Any]) -> BaseModel:
        """
        Validate and normalize the AI response
        Must be implemented by subclasses
        """
        pass

    def build_messages(self) -> List[Dict[str, Any]]:
        """
        Build the complete message list for OpenAI API
        Can be overridden by subclasses for custom behavior
        """
        return [
            {"role": "system", "content": self.get_system_prompt()},
            {"role": "user", "content": self.build_user_message()},
        ]

    def describe(self) -> str:
        """Short description used in log lines"""
        return self.name
