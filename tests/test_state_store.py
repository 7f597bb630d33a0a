"""
Tests for the transition function (reduce) and the transition registry.
"""

import pytest

from rexos.schemas import (
    ACTION_TYPES,
    AdditionalExercise,
    AddAdditionalExercise,
    BodyMeasurements,
    DailyNote,
    DeleteMeal,
    ExerciseLog,
    ExerciseSet,
    HabitLog,
    LoadState,
    LogHabit,
    LogMeal,
    LogNote,
    Meal,
    ProfileUpdate,
    RemoveAdditionalExercise,
    Reset,
    SetStep,
    UpdateProfile,
    UpsertWorkoutLog,
    WorkoutLog,
    initial_state,
)
from rexos.services import state_store
from rexos.services.state_store import normalize_workout_log, reduce
from tests.conftest import MONDAY, TUESDAY


def _meal(meal_id, calories=500, protein=40):
    return Meal(id=meal_id, meal_name="Lunch", calories=calories, protein=protein, carbs=50, fat=15)


def _sets(*pairs):
    return tuple(
        ExerciseSet(set_number=number, reps=reps, weight=weight)
        for number, (reps, weight) in enumerate(pairs, start=1)
    )


# ============================================================================
# REGISTRY
# ============================================================================

def test_every_action_variant_has_a_transition():
    assert set(ACTION_TYPES) == set(state_store._TRANSITIONS)


def test_unknown_action_raises_type_error():
    with pytest.raises(TypeError):
        reduce(initial_state(), object())


# ============================================================================
# REGISTRATION
# ============================================================================

def test_registration_sets_every_configured_field(registered_state, profile, habits, diet_targets):
    assert registered_state.is_registered is True
    assert registered_state.profile == profile
    assert registered_state.habits == habits
    assert registered_state.workout_plan.type == "both"
    assert registered_state.diet_targets == diet_targets


def test_set_step_has_no_bounds_check():
    state = reduce(initial_state(), SetStep(step=7))
    assert state.current_step == 7


def test_transitions_leave_the_previous_aggregate_untouched(registered_state):
    before = registered_state.model_dump()
    reduce(registered_state, LogMeal(date=MONDAY, meal=_meal("m1")))
    reduce(registered_state, Reset())
    assert registered_state.model_dump() == before


# ============================================================================
# HABITS
# ============================================================================

def test_log_habit_creates_record_for_new_date(registered_state):
    state = reduce(registered_state, LogHabit(date=MONDAY, log=HabitLog(habit_id="h1", completed=True)))

    record = state.habit_record_for(MONDAY)
    assert record is not None
    assert record.logs == (HabitLog(habit_id="h1", completed=True),)


def test_log_habit_twice_keeps_one_entry_with_latest_value(registered_state):
    state = reduce(registered_state, LogHabit(date=MONDAY, log=HabitLog(habit_id="h1", completed=True)))
    state = reduce(state, LogHabit(date=MONDAY, log=HabitLog(habit_id="h2", completed=True)))
    state = reduce(state, LogHabit(date=MONDAY, log=HabitLog(habit_id="h1", completed=False)))

    record = state.habit_record_for(MONDAY)
    h1_logs = [log for log in record.logs if log.habit_id == "h1"]
    assert len(h1_logs) == 1
    assert h1_logs[0].completed is False
    # Replaced in place, not moved to the end
    assert [log.habit_id for log in record.logs] == ["h1", "h2"]
    assert len(state.habit_records) == 1


# ============================================================================
# WORKOUTS
# ============================================================================

def test_upsert_workout_log_replaces_by_date(registered_state):
    first = WorkoutLog(date=MONDAY, exercises=(
        ExerciseLog(exercise_id="bench", exercise_name="Bench Press", sets=_sets((10, 60))),
    ))
    second = WorkoutLog(date=MONDAY, exercises=(
        ExerciseLog(exercise_id="bench", exercise_name="Bench Press", sets=_sets((10, 60), (8, 65))),
    ))

    state = reduce(registered_state, UpsertWorkoutLog(log=first))
    state = reduce(state, UpsertWorkoutLog(log=second))

    assert len(state.workout_logs) == 1
    assert len(state.workout_log_for(MONDAY).exercises[0].sets) == 2


def test_upsert_workout_log_prunes_empty_exercise_logs_and_renumbers(registered_state):
    log = WorkoutLog(date=MONDAY, exercises=(
        ExerciseLog(exercise_id="bench", exercise_name="Bench Press", sets=(
            ExerciseSet(set_number=4, reps=10, weight=60),
            ExerciseSet(set_number=9, reps=8, weight=65),
        )),
        ExerciseLog(exercise_id="ohp", exercise_name="Overhead Press", sets=()),
    ))

    state = reduce(registered_state, UpsertWorkoutLog(log=log))

    stored = state.workout_log_for(MONDAY)
    assert [e.exercise_id for e in stored.exercises] == ["bench"]
    assert [s.set_number for s in stored.exercises[0].sets] == [1, 2]


def test_normalize_workout_log_with_zero_sets_equals_no_entry():
    with_empty = WorkoutLog(date=MONDAY, exercises=(
        ExerciseLog(exercise_id="bench", exercise_name="Bench Press", sets=()),
    ))
    assert normalize_workout_log(with_empty) == WorkoutLog(date=MONDAY)


def test_add_additional_exercise_creates_minimal_log(registered_state):
    curl = AdditionalExercise(id="x1", name="Curl", sets=3, reps=12, weight=15)

    state = reduce(registered_state, AddAdditionalExercise(date=TUESDAY, exercise=curl))

    log = state.workout_log_for(TUESDAY)
    assert log.plan_type == "gym"
    assert log.exercises == ()
    assert log.additional_exercises == (curl,)


def test_add_additional_exercise_upserts_by_id(registered_state):
    curl = AdditionalExercise(id="x1", name="Curl", sets=3, reps=12, weight=15)
    heavier = curl.model_copy(update={"weight": 17.5})
    dips = AdditionalExercise(id="x2", name="Dips", sets=3, reps=10, weight=0)

    state = reduce(registered_state, AddAdditionalExercise(date=MONDAY, exercise=curl))
    state = reduce(state, AddAdditionalExercise(date=MONDAY, exercise=dips))
    state = reduce(state, AddAdditionalExercise(date=MONDAY, exercise=heavier))

    assert state.workout_log_for(MONDAY).additional_exercises == (heavier, dips)


def test_remove_additional_exercise(registered_state):
    curl = AdditionalExercise(id="x1", name="Curl", sets=3, reps=12, weight=15)
    state = reduce(registered_state, AddAdditionalExercise(date=MONDAY, exercise=curl))

    state = reduce(state, RemoveAdditionalExercise(date=MONDAY, exercise_id="x1"))

    assert state.workout_log_for(MONDAY).additional_exercises == ()


def test_remove_additional_exercise_without_log_is_a_no_op(registered_state):
    state = reduce(registered_state, RemoveAdditionalExercise(date=MONDAY, exercise_id="x1"))
    assert state == registered_state


# ============================================================================
# MEALS
# ============================================================================

def test_log_meal_appends_in_order(registered_state):
    state = reduce(registered_state, LogMeal(date=MONDAY, meal=_meal("m1")))
    state = reduce(state, LogMeal(date=MONDAY, meal=_meal("m2")))

    assert [m.id for m in state.diet_log_for(MONDAY).meals] == ["m1", "m2"]
    assert len(state.diet_logs) == 1


def test_delete_meal(registered_state):
    state = reduce(registered_state, LogMeal(date=MONDAY, meal=_meal("m1")))
    state = reduce(state, LogMeal(date=MONDAY, meal=_meal("m2")))

    state = reduce(state, DeleteMeal(date=MONDAY, meal_id="m1"))

    assert [m.id for m in state.diet_log_for(MONDAY).meals] == ["m2"]


def test_delete_unknown_meal_is_a_no_op(registered_state):
    state = reduce(registered_state, LogMeal(date=MONDAY, meal=_meal("m1")))

    assert reduce(state, DeleteMeal(date=MONDAY, meal_id="missing")) == state
    assert reduce(state, DeleteMeal(date=TUESDAY, meal_id="m1")) == state


# ============================================================================
# NOTES AND PROFILE
# ============================================================================

def test_log_note_last_write_wins(registered_state):
    state = reduce(registered_state, LogNote(note=DailyNote(date=MONDAY, content="a", updated_at="t1")))
    state = reduce(state, LogNote(note=DailyNote(date=MONDAY, content="b", updated_at="t2")))

    assert len(state.notes) == 1
    assert state.note_for(MONDAY).content == "b"


def test_update_profile_merges_only_set_fields(registered_state):
    measurements = BodyMeasurements(biceps=38.5, updated_at="2024-01-15T08:00:00+00:00")

    state = reduce(registered_state, UpdateProfile(changes=ProfileUpdate(weight=79.2)))
    state = reduce(state, UpdateProfile(changes=ProfileUpdate(measurements=measurements)))

    assert state.profile.weight == 79.2
    assert state.profile.name == "Rex"
    assert state.profile.height == 180
    assert state.profile.measurements == measurements


def test_update_profile_without_profile_is_a_no_op():
    state = reduce(initial_state(), UpdateProfile(changes=ProfileUpdate(weight=79.2)))
    assert state.profile is None


# ============================================================================
# WHOLE-STATE
# ============================================================================

def test_load_state_replaces_everything(registered_state):
    state = reduce(initial_state(), LoadState(state=registered_state))
    assert state == registered_state


def test_reset_returns_initial_state(registered_state):
    state = reduce(registered_state, LogMeal(date=MONDAY, meal=_meal("m1")))
    assert reduce(state, Reset()) == initial_state()
