"""
Tests for the workout-set helpers.
"""

from rexos.schemas import UpsertWorkoutLog
from rexos.services.state_store import reduce
from rexos.services.workout_service import (
    add_set,
    empty_workout_log,
    planned_day,
    planned_exercises,
    remove_set,
    resolve_plan_variant,
    update_set,
)
from tests.conftest import BENCH, MONDAY, OHP, TUESDAY


def test_first_set_uses_target_reps_and_zero_weight():
    log = add_set(empty_workout_log(MONDAY), BENCH)

    exercise_log = log.exercise_log_for("bench")
    assert exercise_log.exercise_name == "Bench Press"
    assert [(s.set_number, s.reps, s.weight) for s in exercise_log.sets] == [(1, 10, 0)]


def test_next_set_copies_previous_set():
    log = add_set(empty_workout_log(MONDAY), BENCH, reps=8, weight=60)
    log = add_set(log, BENCH)

    assert [(s.set_number, s.reps, s.weight) for s in log.exercise_log_for("bench").sets] == [
        (1, 8, 60),
        (2, 8, 60),
    ]


def test_sets_of_different_exercises_are_independent():
    log = add_set(empty_workout_log(MONDAY), BENCH, weight=60)
    log = add_set(log, OHP, weight=40)

    assert [e.exercise_id for e in log.exercises] == ["bench", "ohp"]
    assert log.exercise_log_for("ohp").sets[0].set_number == 1


def test_update_set():
    log = add_set(add_set(empty_workout_log(MONDAY), BENCH, weight=60), BENCH)

    log = update_set(log, "bench", 2, weight=62.5)

    assert [s.weight for s in log.exercise_log_for("bench").sets] == [60, 62.5]


def test_update_set_without_changes_returns_same_log():
    log = add_set(empty_workout_log(MONDAY), BENCH)
    assert update_set(log, "bench", 1) is log


def test_remove_set_renumbers():
    log = empty_workout_log(MONDAY)
    for weight in (60, 65, 70):
        log = add_set(log, BENCH, weight=weight)

    log = remove_set(log, "bench", 2)

    assert [(s.set_number, s.weight) for s in log.exercise_log_for("bench").sets] == [(1, 60), (2, 70)]


def test_removing_only_set_removes_exercise_entry(registered_state):
    log = add_set(empty_workout_log(MONDAY), BENCH)
    log = remove_set(log, "bench", 1)

    assert log.exercise_log_for("bench") is None

    state = reduce(registered_state, UpsertWorkoutLog(log=log))
    assert state.workout_log_for(MONDAY).exercises == ()


def test_resolve_plan_variant(workout_plan):
    assert resolve_plan_variant(workout_plan) == "gym"
    assert resolve_plan_variant(workout_plan, empty_workout_log(MONDAY, "home")) == "home"

    gym_only = workout_plan.model_copy(update={"type": "gym"})
    assert resolve_plan_variant(gym_only, empty_workout_log(MONDAY, "home")) == "gym"


def test_planned_day_and_exercises(workout_plan):
    assert planned_day(workout_plan, MONDAY).workout_name == "Push"
    assert planned_exercises(workout_plan, MONDAY) == (BENCH, OHP)
    assert planned_exercises(workout_plan, MONDAY, "home")[0].id == "pushups"
    assert planned_exercises(workout_plan, TUESDAY) == ()
