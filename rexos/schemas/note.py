"""
Note Schemas
"""

from pydantic import Field

from rexos.schemas.base import RexModel


class DailyNote(RexModel):
    """Free-text journal entry. One per date; the latest write wins."""
    date: str = Field(..., description="Date key YYYY-MM-DD")
    content: str = ""
    updated_at: str = Field(..., description="Last save (ISO-8601)")
