"""
Tests for the analytics series and summary.
"""

import pytest

from rexos.schemas import HabitLog, LogHabit, LogMeal, Meal, UpsertWorkoutLog
from rexos.services.analytics_service import (
    diet_series,
    get_filter_dates,
    habit_completion_series,
    summarize,
    workout_volume_series,
)
from rexos.services.state_store import reduce
from rexos.services.workout_service import add_set, empty_workout_log
from tests.conftest import BENCH, MONDAY, TUESDAY, WEDNESDAY


@pytest.fixture
def tracked_state(registered_state):
    state = registered_state
    for habit_id in ("h1", "h2"):
        state = reduce(state, LogHabit(date=MONDAY, log=HabitLog(habit_id=habit_id, completed=True)))

    log = add_set(empty_workout_log(MONDAY), BENCH, reps=10, weight=60)
    log = add_set(log, BENCH)
    state = reduce(state, UpsertWorkoutLog(log=log))

    state = reduce(state, LogMeal(date=MONDAY, meal=Meal(id="m1", meal_name="Lunch", calories=1800, protein=120)))
    state = reduce(state, LogMeal(date=WEDNESDAY, meal=Meal(id="m2", meal_name="Lunch", calories=2200, protein=160)))
    return state


def test_filter_dates_end_at_reference_date():
    assert get_filter_dates("week", WEDNESDAY) == [
        "2024-01-11", "2024-01-12", "2024-01-13", "2024-01-14",
        "2024-01-15", "2024-01-16", "2024-01-17",
    ]
    assert get_filter_dates("day", MONDAY) == [MONDAY]
    assert len(get_filter_dates("year", MONDAY)) == 365


def test_unknown_filter_raises():
    with pytest.raises(ValueError):
        get_filter_dates("decade", MONDAY)


def test_series_are_aligned_with_dates(tracked_state):
    dates = [MONDAY, TUESDAY, WEDNESDAY]

    assert habit_completion_series(tracked_state, dates) == pytest.approx([40, 0, 0])
    assert workout_volume_series(tracked_state, dates) == [1200, 0, 0]
    assert diet_series(tracked_state, dates) == {
        "calories": [1800, 0, 2200],
        "protein": [120, 0, 160],
    }


def test_habit_series_without_habits(tracked_state):
    state = tracked_state.model_copy(update={"habits": ()})
    assert habit_completion_series(state, [MONDAY]) == [0]


def test_summary_averages_calories_over_logged_days(tracked_state):
    summary = summarize(tracked_state, [MONDAY, TUESDAY, WEDNESDAY])

    assert summary.average_habit_completion == 13
    assert summary.total_volume == 1200
    assert summary.average_calories == 2000


def test_summary_of_empty_period(registered_state):
    summary = summarize(registered_state, [])
    assert (summary.average_habit_completion, summary.total_volume, summary.average_calories) == (0, 0, 0)
