"""
Workout Schemas
Weekly workout plan (the template) and per-day workout logs.

The plan holds up to two schedules, gym and home, each with one DayWorkout
per weekday. A WorkoutLog records what was actually done on a date: sets
for plan exercises plus optional ad hoc "additional" exercises that exist
for that day only.
"""

from typing import Literal, Optional, Tuple
from pydantic import Field

from rexos.schemas.base import RexModel


PlanType = Literal["gym", "home", "both"]
PlanVariant = Literal["gym", "home"]


class Exercise(RexModel):
    """A planned exercise with its targets."""
    id: str
    name: str
    target_sets: int = Field(..., description="Planned number of sets")
    target_reps: int = Field(..., description="Planned reps per set")


class DayWorkout(RexModel):
    """One weekday of a schedule. An empty exercise list is a rest day."""
    day: str = Field(..., description="Weekday name, e.g. Monday")
    workout_name: str = Field("", description='Label such as "Push", "Pull", "Legs"')
    exercises: Tuple[Exercise, ...] = ()


class WorkoutPlan(RexModel):
    """
    Weekly workout template.

    Example:
        {
            "type": "both",
            "gym": [{"day": "Monday", "workoutName": "Push", "exercises": [...]}, ...],
            "home": [{"day": "Monday", "workoutName": "Core", "exercises": [...]}, ...]
        }
    """
    type: PlanType
    gym: Optional[Tuple[DayWorkout, ...]] = None
    home: Optional[Tuple[DayWorkout, ...]] = None

    def schedule_for(self, variant: PlanVariant) -> Tuple[DayWorkout, ...]:
        """The gym or home schedule, empty when that schedule is not configured."""
        schedule = self.gym if variant == "gym" else self.home
        return schedule or ()

    def day_for(self, weekday: str, variant: PlanVariant) -> Optional[DayWorkout]:
        """The DayWorkout of a weekday in the given schedule, if any."""
        for day in self.schedule_for(variant):
            if day.day == weekday:
                return day
        return None


class ExerciseSet(RexModel):
    """One performed set. Set numbers run 1..n within an exercise log."""
    set_number: int
    reps: float
    weight: float = Field(..., description="Load in kg (0 for bodyweight)")

    @property
    def volume(self) -> float:
        return self.reps * self.weight


class ExerciseLog(RexModel):
    """Sets performed for one plan exercise on one date."""
    exercise_id: str
    exercise_name: str = Field(..., description="Snapshot of the exercise name when logged")
    sets: Tuple[ExerciseSet, ...] = ()

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


class AdditionalExercise(RexModel):
    """An ad hoc exercise logged for a single day, outside the plan."""
    id: str
    name: str
    sets: int
    reps: float
    weight: float

    @property
    def volume(self) -> float:
        return self.sets * self.reps * self.weight


class WorkoutLog(RexModel):
    """
    Everything logged for one date.

    Exercise logs never carry zero sets; the store prunes them on upsert.
    """
    date: str = Field(..., description="Date key YYYY-MM-DD")
    plan_type: PlanVariant = Field("gym", description="Schedule used that day")
    exercises: Tuple[ExerciseLog, ...] = ()
    additional_exercises: Tuple[AdditionalExercise, ...] = ()
    completed_at: Optional[str] = None

    @property
    def plan_volume(self) -> float:
        """Volume (reps x weight) of plan-derived sets only."""
        return sum(e.volume for e in self.exercises)

    @property
    def additional_volume(self) -> float:
        return sum(e.volume for e in self.additional_exercises)

    @property
    def total_volume(self) -> float:
        return self.plan_volume + self.additional_volume

    def exercise_log_for(self, exercise_id: str) -> Optional[ExerciseLog]:
        for exercise_log in self.exercises:
            if exercise_log.exercise_id == exercise_id:
                return exercise_log
        return None
