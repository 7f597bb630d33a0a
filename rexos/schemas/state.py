"""
RexOS Aggregate
The single value holding all application state at a point in time.

RexState is the sole unit of persistence and the sole input to the rating
engine. It owns every nested collection; transitions build a new RexState
and never touch the previous one.

Optional fields (profile, workout_plan, diet_targets) are None until
configured, and every consumer handles that case explicitly.
"""

from typing import Optional, Tuple
from pydantic import Field

from rexos.schemas.base import RexModel
from rexos.schemas.diet import DailyDietLog, DietTargets
from rexos.schemas.habit import DailyHabitRecord, Habit
from rexos.schemas.note import DailyNote
from rexos.schemas.profile import UserProfile
from rexos.schemas.workout import WorkoutLog, WorkoutPlan


class RexState(RexModel):
    """
    The application aggregate.

    Per-date collections are unique by date within each collection and are
    kept in insertion order.
    """
    is_registered: bool = False
    current_step: int = Field(1, description="Registration wizard step (1..4)")
    profile: Optional[UserProfile] = None
    habits: Tuple[Habit, ...] = ()
    workout_plan: Optional[WorkoutPlan] = None
    diet_targets: Optional[DietTargets] = None
    habit_records: Tuple[DailyHabitRecord, ...] = ()
    workout_logs: Tuple[WorkoutLog, ...] = ()
    diet_logs: Tuple[DailyDietLog, ...] = ()
    notes: Tuple[DailyNote, ...] = ()

    # Lookups by date key
    # -------------------

    def habit_record_for(self, date: str) -> Optional[DailyHabitRecord]:
        return next((r for r in self.habit_records if r.date == date), None)

    def workout_log_for(self, date: str) -> Optional[WorkoutLog]:
        return next((l for l in self.workout_logs if l.date == date), None)

    def diet_log_for(self, date: str) -> Optional[DailyDietLog]:
        return next((l for l in self.diet_logs if l.date == date), None)

    def note_for(self, date: str) -> Optional[DailyNote]:
        return next((n for n in self.notes if n.date == date), None)


def initial_state() -> RexState:
    """The empty aggregate used on first start and after a reset."""
    return RexState()
