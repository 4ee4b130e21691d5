"""
Base Agent for ADHD Planner
Defines the abstract base class and response structure shared by agents.

Agents sit between the outer surfaces (CLI, HTTP API) and the record store:
- Each agent handles a named set of intents
- process() dispatches an intent with a context dict to a handler
- Errors are caught at the intent boundary and returned as AgentResponse
- Every request is recorded with a JSON audit line on the agent logger
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
import json


@dataclass
class AgentResponse:
    """
    Standard response structure from any agent.

    Attributes:
        success: Whether the operation completed successfully
        message: Human-readable description of the result
        data: Optional structured data (metrics, reports, etc.)
        suggestions: Optional list of follow-up actions for the user
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert response to dictionary for serialization."""
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "suggestions": self.suggestions
        }

    @classmethod
    def error(cls, message: str, data: Optional[Dict[str, Any]] = None) -> 'AgentResponse':
        """Factory method for creating error responses."""
        return cls(success=False, message=message, data=data)

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None,
           suggestions: Optional[List[str]] = None) -> 'AgentResponse':
        """Factory method for creating success responses."""
        return cls(success=True, message=message, data=data, suggestions=suggestions)


class BaseAgent(ABC):
    """
    Abstract base class for planner agents.

    Subclasses must implement:
    - process(): Execute the actual request handling
    - get_supported_intents(): Return list of intents this agent handles
    """

    def __init__(self, store, name: str):
        """
        Initialize the base agent.

        Args:
            store: RecordStore instance for data access
            name: Unique identifier for this agent (e.g., "review")
        """
        self.store = store
        self.name = name
        self.logger = logging.getLogger(f"agent.{name}")

    def can_handle(self, intent: str, context: Dict[str, Any]) -> bool:
        """Return True if the intent is one this agent supports."""
        return intent in self.get_supported_intents()

    @abstractmethod
    def process(self, intent: str, context: Dict[str, Any]) -> AgentResponse:
        """
        Process the request and return a response.

        Args:
            intent: The intent to handle
            context: Request parameters

        Returns:
            AgentResponse with success/failure status and relevant data
        """
        pass

    @abstractmethod
    def get_supported_intents(self) -> List[str]:
        pass

    def log_action(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an action taken by this agent as a single JSON line.

        Args:
            action: Description of the action taken
            details: Optional additional details as key-value pairs
        """
        log_entry = {
            "agent": self.name,
            "action": action,
            "timestamp": datetime.now().isoformat()
        }
        if details:
            log_entry["details"] = details

        self.logger.info(json.dumps(log_entry, default=str))
