"""
Tests for application wiring and the registration wizard helpers.
"""

import pytest

from rexos.core.constants import PRESET_HABITS
from rexos.main import create_app
from rexos.schemas import DietTargets, HabitLog, LogHabit
from rexos.services.registration_service import (
    build_exercise,
    build_preset_habits,
    build_profile,
    build_schedule,
    build_workout_plan,
    register,
)
from tests.conftest import MONDAY


def _register(app):
    bench = build_exercise("Bench Press", 3, 10)
    plan = build_workout_plan("gym", gym=build_schedule({"Monday": [bench]}, {"Monday": "Push"}))
    return register(
        app.store,
        build_profile("Rex", 80, 180),
        build_preset_habits(["Reading", "Meditation"]),
        plan,
        DietTargets(calories=2000, protein=150, carbs=200, fat=70),
    )


def test_preset_habits_keep_preset_order():
    habits = build_preset_habits(["Meditation", "Reading"])

    assert [h.name for h in habits] == ["Reading", "Meditation"]
    assert habits[0].icon == "📖"
    assert habits[0].id != habits[1].id


def test_all_preset_habits_by_default():
    assert len(build_preset_habits()) == len(PRESET_HABITS)


def test_unknown_preset_habit_raises():
    with pytest.raises(ValueError):
        build_preset_habits(["Juggling"])


def test_build_schedule_fills_rest_days():
    schedule = build_schedule({"Monday": [build_exercise("Squat", 5, 5)]})

    assert [day.day for day in schedule][:2] == ["Monday", "Tuesday"]
    assert len(schedule) == 7
    assert schedule[1].exercises == ()


def test_profile_bmi():
    assert build_profile("Rex", 80, 180).bmi() == 24.7


def test_register_runs_the_wizard(database_url, clock):
    app = create_app(database_url, clock=clock)

    state = _register(app)

    assert state.is_registered
    assert state.current_step == 4
    assert [h.name for h in state.habits] == ["Reading", "Meditation"]
    assert state.workout_plan.day_for("Monday", "gym").workout_name == "Push"


def test_state_survives_restart(database_url, clock):
    app = create_app(database_url, clock=clock)
    state = _register(app)
    habit_id = state.habits[0].id
    app.dispatch(LogHabit(date=MONDAY, log=HabitLog(habit_id=habit_id, completed=True)))

    restarted = create_app(database_url, clock=clock)

    assert restarted.state == app.state
    assert restarted.state.habit_record_for(MONDAY).completed_habit_ids() == {habit_id}


def test_pending_note_is_saved_on_tick_and_shutdown(database_url, clock):
    app = create_app(database_url, clock=clock)

    app.notes.edit(MONDAY, "Leg day tomorrow")
    assert app.tick() == 0
    clock.advance(1)
    assert app.tick() == 1
    assert app.state.note_for(MONDAY).content == "Leg day tomorrow"

    app.notes.edit(MONDAY, "Leg day tomorrow. Sleep early.")
    app.shutdown()

    assert create_app(database_url, clock=clock).state.note_for(MONDAY).content == "Leg day tomorrow. Sleep early."
