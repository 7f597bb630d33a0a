"""
Workout Service
Pure helpers for building the next WorkoutLog of a date.

These functions never touch the store: they take the current log (or None)
and return the log to dispatch as `UpsertWorkoutLog`. The store normalizes
whatever it receives (empty exercise logs pruned, sets renumbered), and the
helpers here already keep those invariants themselves.

Typical flow:
    log = state.workout_log_for(date) or empty_workout_log(date, variant)
    log = add_set(log, exercise)
    store.dispatch(UpsertWorkoutLog(log=log))
"""

from typing import Optional, Tuple

from rexos.core.calendar import get_day_name
from rexos.schemas.workout import (
    DayWorkout,
    Exercise,
    ExerciseLog,
    ExerciseSet,
    PlanVariant,
    WorkoutLog,
    WorkoutPlan,
)


def empty_workout_log(date: str, plan_type: PlanVariant = "gym") -> WorkoutLog:
    """A log with nothing recorded yet."""
    return WorkoutLog(date=date, plan_type=plan_type)


def resolve_plan_variant(plan: WorkoutPlan, log: Optional[WorkoutLog] = None) -> PlanVariant:
    """
    Which schedule applies to a day.

    Plans of type "both" use the variant recorded on that day's log
    (gym when nothing is logged yet); other plans use their own type.
    """
    if plan.type == "both":
        return log.plan_type if log is not None else "gym"
    return plan.type


def planned_day(plan: WorkoutPlan, date: str, variant: Optional[PlanVariant] = None) -> Optional[DayWorkout]:
    """The DayWorkout scheduled for a date's weekday, if the schedule defines one."""
    variant = variant or resolve_plan_variant(plan)
    return plan.day_for(get_day_name(date), variant)


def planned_exercises(plan: WorkoutPlan, date: str, variant: Optional[PlanVariant] = None) -> Tuple[Exercise, ...]:
    """Planned exercises for a date. Empty on rest days."""
    day = planned_day(plan, date, variant)
    return day.exercises if day is not None else ()


def add_set(
    log: WorkoutLog,
    exercise: Exercise,
    reps: Optional[float] = None,
    weight: Optional[float] = None
) -> WorkoutLog:
    """
    Append the next set of a plan exercise.

    Reps and weight default to the previous set of that exercise, or to the
    exercise's target reps and 0 kg for the first set.

    Example:
        log = add_set(empty_workout_log("2024-01-15"), bench_press)
        log.exercises[0].sets  # (ExerciseSet(set_number=1, reps=10, weight=0),)
    """
    existing = log.exercise_log_for(exercise.id)
    previous = existing.sets[-1] if existing is not None and existing.sets else None

    new_set = ExerciseSet(
        set_number=(len(existing.sets) if existing is not None else 0) + 1,
        reps=reps if reps is not None else (previous.reps if previous else exercise.target_reps),
        weight=weight if weight is not None else (previous.weight if previous else 0),
    )

    if existing is None:
        exercise_log = ExerciseLog(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            sets=(new_set,),
        )
        return log.model_copy(update={"exercises": log.exercises + (exercise_log,)})

    exercises = tuple(
        e.model_copy(update={"sets": e.sets + (new_set,)}) if e.exercise_id == exercise.id else e
        for e in log.exercises
    )
    return log.model_copy(update={"exercises": exercises})


def update_set(
    log: WorkoutLog,
    exercise_id: str,
    set_number: int,
    reps: Optional[float] = None,
    weight: Optional[float] = None
) -> WorkoutLog:
    """Change reps and/or weight of one set. Unknown exercise or set: unchanged."""
    changes = {}
    if reps is not None:
        changes["reps"] = reps
    if weight is not None:
        changes["weight"] = weight
    if not changes:
        return log

    exercises = tuple(
        e.model_copy(update={
            "sets": tuple(
                s.model_copy(update=changes) if s.set_number == set_number else s
                for s in e.sets
            )
        }) if e.exercise_id == exercise_id else e
        for e in log.exercises
    )
    return log.model_copy(update={"exercises": exercises})


def remove_set(log: WorkoutLog, exercise_id: str, set_number: int) -> WorkoutLog:
    """
    Remove one set, renumber the remaining sets from 1 and drop the
    exercise log entirely once its last set is gone.
    """
    exercises = []
    for e in log.exercises:
        if e.exercise_id != exercise_id:
            exercises.append(e)
            continue

        remaining = [s for s in e.sets if s.set_number != set_number]
        if not remaining:
            continue
        exercises.append(e.model_copy(update={
            "sets": tuple(
                s.model_copy(update={"set_number": number})
                for number, s in enumerate(remaining, start=1)
            )
        }))

    return log.model_copy(update={"exercises": tuple(exercises)})
