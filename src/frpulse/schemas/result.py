"""
Result of one lifecycle operation.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..models.document import Document


class LifecycleState(str, Enum):
    """States of one apply-change invocation."""
    IDLE = "idle"
    LOADED = "loaded"
    MUTATED = "mutated"
    PERSISTED = "persisted"
    RESTARTED = "restarted"
    DONE = "done"
    FAILED = "failed"


class ChangeResult(BaseModel):
    """Outcome of an apply-change invocation, tagged success or failure."""
    success: bool = Field(..., description="Whether the change was persisted")
    state: LifecycleState = Field(..., description="Terminal state (done or failed)")
    message: str = Field(..., description="Human-readable outcome")
    error: Optional[str] = Field(default=None, description="Error kind when failed")
    failed_at: Optional[LifecycleState] = Field(
        default=None,
        description="Last state reached before failing"
    )
    restarted: bool = Field(default=False, description="Whether the unit was restarted")
    restart_error: Optional[str] = Field(
        default=None,
        description="Restart failure message; the change itself is persisted"
    )
    warnings: list[str] = Field(default_factory=list, description="Parse warnings")
    document: Optional[Document] = Field(default=None, description="Document as persisted")
