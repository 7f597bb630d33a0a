"""
Registration Service
Builds the entities collected by the four-step registration wizard and
dispatches them in order.

Steps:
    1. Profile   -> SetProfile
    2. Habits    -> SetHabits
    3. Workout   -> SetWorkoutPlan
    4. Diet      -> SetDietTargets, then CompleteRegistration
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from rexos.core.calendar import now_iso
from rexos.core.constants import (
    PRESET_HABITS,
    REGISTRATION_STEPS,
    STEP_DIET,
    STEP_HABITS,
    STEP_WORKOUT,
    WEEKDAYS,
)
from rexos.core.identifiers import generate_id
from rexos.schemas.actions import (
    CompleteRegistration,
    SetDietTargets,
    SetHabits,
    SetProfile,
    SetStep,
    SetWorkoutPlan,
)
from rexos.schemas.diet import DietTargets
from rexos.schemas.habit import Habit
from rexos.schemas.profile import UserProfile
from rexos.schemas.state import RexState
from rexos.schemas.workout import DayWorkout, Exercise, PlanType, WorkoutPlan


logger = logging.getLogger(__name__)


def build_profile(name: str, weight: float, height: float) -> UserProfile:
    return UserProfile(name=name, weight=weight, height=height, created_at=now_iso())


def build_habit(name: str, description: str = "", icon: str = "⭐") -> Habit:
    return Habit(id=generate_id(), name=name, description=description, icon=icon)


def build_preset_habits(names: Optional[Iterable[str]] = None) -> List[Habit]:
    """
    Habits from the preset list, in preset order.

    Args:
        names: Preset names to include (all presets when None)

    Raises:
        ValueError: If a name is not a preset
    """
    presets = {name: (icon, description) for name, icon, description in PRESET_HABITS}
    wanted = set(names) if names is not None else set(presets)

    unknown = wanted - set(presets)
    if unknown:
        raise ValueError(f"Unknown preset habits: {', '.join(sorted(unknown))}")

    return [
        build_habit(name, description, icon)
        for name, icon, description in PRESET_HABITS
        if name in wanted
    ]


def build_exercise(name: str, target_sets: int, target_reps: int) -> Exercise:
    return Exercise(id=generate_id(), name=name, target_sets=target_sets, target_reps=target_reps)


def build_schedule(
    days: Dict[str, Sequence[Exercise]],
    workout_names: Optional[Dict[str, str]] = None
) -> tuple:
    """
    One DayWorkout per weekday, Monday first. Weekdays missing from `days`
    become rest days.

    Example:
        build_schedule({"Monday": [bench, incline]}, {"Monday": "Push"})
    """
    workout_names = workout_names or {}
    return tuple(
        DayWorkout(
            day=weekday,
            workout_name=workout_names.get(weekday, ""),
            exercises=tuple(days.get(weekday, ())),
        )
        for weekday in WEEKDAYS
    )


def build_workout_plan(
    plan_type: PlanType,
    gym: Optional[tuple] = None,
    home: Optional[tuple] = None
) -> WorkoutPlan:
    return WorkoutPlan(type=plan_type, gym=gym, home=home)


def register(
    store,
    profile: UserProfile,
    habits: Sequence[Habit],
    workout_plan: WorkoutPlan,
    diet_targets: DietTargets
) -> RexState:
    """
    Run the whole wizard against a store and mark registration complete.

    Returns:
        The registered aggregate
    """
    store.dispatch(SetProfile(profile=profile))
    store.dispatch(SetStep(step=STEP_HABITS))
    store.dispatch(SetHabits(habits=tuple(habits)))
    store.dispatch(SetStep(step=STEP_WORKOUT))
    store.dispatch(SetWorkoutPlan(plan=workout_plan))
    store.dispatch(SetStep(step=STEP_DIET))
    store.dispatch(SetDietTargets(targets=diet_targets))
    state = store.dispatch(CompleteRegistration())

    logger.info(f"Registered {profile.name} ({', '.join(REGISTRATION_STEPS.values())}), {len(habits)} habits")
    return state
