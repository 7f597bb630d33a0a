"""
Habit Schemas
Configured habits and the per-day completion records.
"""

from typing import Optional, Tuple
from pydantic import Field

from rexos.schemas.base import RexModel


class Habit(RexModel):
    """A daily habit configured at registration."""
    id: str = Field(..., description="Stable unique identifier")
    name: str
    description: str = ""
    icon: str = Field("", description="Icon glyph, e.g. an emoji")


class HabitLog(RexModel):
    """Completion state of one habit on one day."""
    habit_id: str
    completed: bool
    completed_at: Optional[str] = Field(None, description="When it was ticked off (ISO-8601)")


class DailyHabitRecord(RexModel):
    """
    All habit logs of one date.

    At most one log per habit id; the store replaces instead of duplicating.
    """
    date: str = Field(..., description="Date key YYYY-MM-DD")
    logs: Tuple[HabitLog, ...] = ()

    def completed_habit_ids(self) -> set:
        """Distinct habit ids marked completed on this date."""
        return {log.habit_id for log in self.logs if log.completed}
