"""
Error Log Model
Stores application errors for debugging.

Captures the information needed to understand a failed save or export:
- Timestamp
- Error type and severity
- Code location
- Full error traceback
- Additional context data
"""

from sqlalchemy import Column, String, Text, JSON, DateTime
from datetime import datetime, timezone

from rexos.models.base import BaseModel


class ErrorLog(BaseModel):
    """
    Error Log Model

    Each error is uniquely identified and carries the context needed
    to understand and reproduce the issue.
    """
    __tablename__ = "error_logs"

    # Timestamp when error occurred
    timestamp = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    # Error classification
    error_type = Column(String(255), nullable=False, index=True)  # e.g., "PersistenceError"
    severity = Column(String(20), default="error", nullable=False)  # debug, info, warning, error, critical

    # Location info
    module = Column(String(255), nullable=True)  # e.g., "rexos/services/persistence.py"
    function = Column(String(255), nullable=True)  # e.g., "save"
    line_number = Column(String(20), nullable=True)

    # Error details
    message = Column(Text, nullable=False)  # Short error message
    stack_trace = Column(Text, nullable=True)  # Full stack trace

    # Additional context
    context_data = Column(JSON, nullable=True)  # e.g. {"operation": "save", "attempt": 2}

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type={self.error_type}, message={self.message[:50]}...)>"
