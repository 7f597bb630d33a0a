"""
State Transition Actions
One frozen model per transition kind, each carrying its own typed payload.

`Action` is the discriminated union of all variants (discriminator: `kind`),
so a serialized action such as {"kind": "log_meal", "date": ..., "meal": ...}
validates straight into the right class:

    TypeAdapter(Action).validate_python({"kind": "reset"})  # Reset()

The reducer in rexos.services.state_store registers exactly one handler per
class listed in ACTION_TYPES.
"""

from typing import Annotated, Literal, Tuple, Union, get_args
from pydantic import Field

from rexos.schemas.base import RexModel
from rexos.schemas.diet import DietTargets, Meal
from rexos.schemas.habit import Habit, HabitLog
from rexos.schemas.note import DailyNote
from rexos.schemas.profile import ProfileUpdate, UserProfile
from rexos.schemas.state import RexState
from rexos.schemas.workout import AdditionalExercise, WorkoutLog, WorkoutPlan


# ============================================================================
# REGISTRATION
# ============================================================================

class SetProfile(RexModel):
    kind: Literal["set_profile"] = "set_profile"
    profile: UserProfile


class SetHabits(RexModel):
    kind: Literal["set_habits"] = "set_habits"
    habits: Tuple[Habit, ...]


class SetWorkoutPlan(RexModel):
    kind: Literal["set_workout_plan"] = "set_workout_plan"
    plan: WorkoutPlan


class SetDietTargets(RexModel):
    kind: Literal["set_diet_targets"] = "set_diet_targets"
    targets: DietTargets


class SetStep(RexModel):
    """Move the registration wizard. No bounds checking (callers use 1..4)."""
    kind: Literal["set_step"] = "set_step"
    step: int


class CompleteRegistration(RexModel):
    kind: Literal["complete_registration"] = "complete_registration"


# ============================================================================
# DAILY LOGGING
# ============================================================================

class LogHabit(RexModel):
    """Upsert a habit log keyed by (date, habit_id)."""
    kind: Literal["log_habit"] = "log_habit"
    date: str
    log: HabitLog


class UpsertWorkoutLog(RexModel):
    """Set or replace the whole workout log of `log.date`."""
    kind: Literal["upsert_workout_log"] = "upsert_workout_log"
    log: WorkoutLog


class AddAdditionalExercise(RexModel):
    kind: Literal["add_additional_exercise"] = "add_additional_exercise"
    date: str
    exercise: AdditionalExercise


class RemoveAdditionalExercise(RexModel):
    kind: Literal["remove_additional_exercise"] = "remove_additional_exercise"
    date: str
    exercise_id: str


class LogMeal(RexModel):
    """Append a meal to a date. Meals are never replaced on log."""
    kind: Literal["log_meal"] = "log_meal"
    date: str
    meal: Meal


class DeleteMeal(RexModel):
    kind: Literal["delete_meal"] = "delete_meal"
    date: str
    meal_id: str


class LogNote(RexModel):
    """Upsert the note of `note.date`, last write wins."""
    kind: Literal["log_note"] = "log_note"
    note: DailyNote


class UpdateProfile(RexModel):
    """Shallow-merge the explicitly set fields of `changes` into the profile."""
    kind: Literal["update_profile"] = "update_profile"
    changes: ProfileUpdate


# ============================================================================
# WHOLE-STATE
# ============================================================================

class LoadState(RexModel):
    kind: Literal["load_state"] = "load_state"
    state: RexState


class Reset(RexModel):
    """Discard everything and return to the empty aggregate."""
    kind: Literal["reset"] = "reset"


Action = Annotated[
    Union[
        SetProfile,
        SetHabits,
        SetWorkoutPlan,
        SetDietTargets,
        SetStep,
        CompleteRegistration,
        LogHabit,
        UpsertWorkoutLog,
        AddAdditionalExercise,
        RemoveAdditionalExercise,
        LogMeal,
        DeleteMeal,
        LogNote,
        UpdateProfile,
        LoadState,
        Reset,
    ],
    Field(discriminator="kind"),
]

# Every variant of the union, for exhaustiveness checks
ACTION_TYPES: Tuple[type, ...] = get_args(get_args(Action)[0])
