"""
Exception types shared by the record store and the analytics engine.
"""

from typing import Any, Optional


class PlannerError(Exception):
    """Base class for planner errors."""
    pass


class NotFound(PlannerError):
    """Raised when a get/update/delete references an id with no record."""
    def __init__(self, kind: str, record_id: Any):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class InvalidWindow(PlannerError):
    """Raised when a time window ends at or before its start."""
    pass


class InvalidRecord(PlannerError):
    """Raised when record content violates the data model."""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)
