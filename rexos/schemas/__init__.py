"""
Pydantic Schemas Module
Contains the RexOS value records, the aggregate and the transition actions.

Pydantic schemas are used for:
- Validating the stored document when it is loaded
- Serializing the aggregate to JSON for persistence
- Typing every transition payload
"""

from rexos.schemas.profile import BodyMeasurements, UserProfile, ProfileUpdate, bmi_category
from rexos.schemas.habit import Habit, HabitLog, DailyHabitRecord
from rexos.schemas.workout import (
    Exercise,
    DayWorkout,
    WorkoutPlan,
    ExerciseSet,
    ExerciseLog,
    AdditionalExercise,
    WorkoutLog,
)
from rexos.schemas.diet import DietTargets, FoodItem, Meal, DailyDietLog, MacroTotals
from rexos.schemas.note import DailyNote
from rexos.schemas.rating import Rating
from rexos.schemas.state import RexState, initial_state
from rexos.schemas.actions import (
    Action,
    ACTION_TYPES,
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
)

__all__ = [
    "BodyMeasurements",
    "UserProfile",
    "ProfileUpdate",
    "bmi_category",
    "Habit",
    "HabitLog",
    "DailyHabitRecord",
    "Exercise",
    "DayWorkout",
    "WorkoutPlan",
    "ExerciseSet",
    "ExerciseLog",
    "AdditionalExercise",
    "WorkoutLog",
    "DietTargets",
    "FoodItem",
    "Meal",
    "DailyDietLog",
    "MacroTotals",
    "DailyNote",
    "Rating",
    "RexState",
    "initial_state",
    "Action",
    "ACTION_TYPES",
    "SetProfile",
    "SetHabits",
    "SetWorkoutPlan",
    "SetDietTargets",
    "SetStep",
    "CompleteRegistration",
    "LogHabit",
    "UpsertWorkoutLog",
    "AddAdditionalExercise",
    "RemoveAdditionalExercise",
    "LogMeal",
    "DeleteMeal",
    "LogNote",
    "UpdateProfile",
    "LoadState",
    "Reset",
]
