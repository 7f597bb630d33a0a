"""
Shared fixtures: a temporary SQLite store, a fake clock and a registered
sample aggregate.

Dates used across the suite:
    2024-01-15 Monday    (Push: bench, ohp)
    2024-01-16 Tuesday   (rest)
    2024-01-17 Wednesday (Pull: row)
"""

import pytest

from rexos.core.constants import WEEKDAYS
from rexos.db.session import create_session_factory
from rexos.schemas import (
    CompleteRegistration,
    DayWorkout,
    DietTargets,
    Exercise,
    Habit,
    SetDietTargets,
    SetHabits,
    SetProfile,
    SetWorkoutPlan,
    UserProfile,
    WorkoutPlan,
    initial_state,
)
from rexos.services.error_logging import error_logger
from rexos.services.state_store import reduce


MONDAY = "2024-01-15"
TUESDAY = "2024-01-16"
WEDNESDAY = "2024-01-17"
WEEK = [
    "2024-01-15",
    "2024-01-16",
    "2024-01-17",
    "2024-01-18",
    "2024-01-19",
    "2024-01-20",
    "2024-01-21",
]

BENCH = Exercise(id="bench", name="Bench Press", target_sets=3, target_reps=10)
OHP = Exercise(id="ohp", name="Overhead Press", target_sets=3, target_reps=8)
ROW = Exercise(id="row", name="Barbell Row", target_sets=3, target_reps=10)
PUSHUPS = Exercise(id="pushups", name="Push-ups", target_sets=3, target_reps=20)


class FakeClock:
    """Monotonic clock moved by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_schedule(days: dict) -> tuple:
    """Seven DayWorkouts from {weekday: (workout_name, exercises)}; other days rest."""
    return tuple(
        DayWorkout(day=weekday, workout_name=days.get(weekday, ("", ()))[0], exercises=days.get(weekday, ("", ()))[1])
        for weekday in WEEKDAYS
    )


@pytest.fixture(autouse=True)
def reset_error_logger():
    """Keep the error logger singleton from leaking a database between tests."""
    yield
    error_logger.set_db_session_factory(None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'rexos.db'}"


@pytest.fixture
def session_factory(database_url):
    return create_session_factory(database_url)


@pytest.fixture
def habits():
    return (
        Habit(id="h1", name="Sleep 7-8 Hours", icon="🌙"),
        Habit(id="h2", name="Drink Water", icon="💧"),
        Habit(id="h3", name="Reading", icon="📖"),
        Habit(id="h4", name="Meditation", icon="🧘"),
        Habit(id="h5", name="Workout", icon="💪"),
    )


@pytest.fixture
def workout_plan():
    return WorkoutPlan(
        type="both",
        gym=make_schedule({
            "Monday": ("Push", (BENCH, OHP)),
            "Wednesday": ("Pull", (ROW,)),
        }),
        home=make_schedule({
            "Monday": ("Bodyweight", (PUSHUPS,)),
        }),
    )


@pytest.fixture
def diet_targets():
    return DietTargets(calories=2000, protein=150, carbs=200, fat=70)


@pytest.fixture
def profile():
    return UserProfile(name="Rex", weight=80, height=180, created_at="2024-01-01T08:00:00+00:00")


@pytest.fixture
def registered_state(profile, habits, workout_plan, diet_targets):
    """A fully registered aggregate with nothing logged yet."""
    state = initial_state()
    for action in (
        SetProfile(profile=profile),
        SetHabits(habits=habits),
        SetWorkoutPlan(plan=workout_plan),
        SetDietTargets(targets=diet_targets),
        CompleteRegistration(),
    ):
        state = reduce(state, action)
    return state
