"""
State Store Service
Applies named transitions to the RexOS aggregate.

This service provides:
    - `reduce(state, action)`: the pure transition function
    - `RexStore`: holds the current aggregate, applies actions one at a time,
      notifies subscribers and persists after every transition

Transition rules:
    - Every transition is total: any well-formed action yields a new aggregate.
      Payloads are not validated against business rules (that belongs to the
      form layer).
    - The previous aggregate is never modified (frozen models, tuples).
    - List upserts keep the order of existing entries and append new ones at
      the end. Nothing is sorted here.

Dispatch goes through a registry keyed by action class. The registry is
checked against every variant of `Action` at import time, so adding a
variant without a handler fails loudly instead of being ignored.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from rexos.core.config import settings
from rexos.core.exceptions import PersistenceError
from rexos.schemas.actions import (
    ACTION_TYPES,
    AddAdditionalExercise,
    CompleteRegistration,
    DeleteMeal,
    LoadState,
    LogHabit,
    LogMeal,
    LogNote,
    RemoveAdditionalExercise,
    Reset,
    SetDietTargets,
    SetHabits,
    SetProfile,
    SetStep,
    SetWorkoutPlan,
    UpdateProfile,
    UpsertWorkoutLog,
)
from rexos.schemas.diet import DailyDietLog
from rexos.schemas.habit import DailyHabitRecord
from rexos.schemas.state import RexState, initial_state
from rexos.schemas.workout import ExerciseLog, WorkoutLog
from rexos.services.error_logging import error_logger


logger = logging.getLogger(__name__)

T = TypeVar("T")


# Helper Functions
# ----------------

def _upsert(
    items: Tuple[T, ...],
    matches: Callable[[T], bool],
    new_item: T
) -> Tuple[T, ...]:
    """
    Replace the first item matching `matches` with `new_item`, else append it.

    Order of existing items is preserved.
    """
    for index, item in enumerate(items):
        if matches(item):
            return items[:index] + (new_item,) + items[index + 1:]
    return items + (new_item,)


def _replace_where(
    items: Tuple[T, ...],
    matches: Callable[[T], bool],
    update: Callable[[T], T]
) -> Tuple[T, ...]:
    """Apply `update` to every matching item, leaving the others untouched."""
    return tuple(update(item) if matches(item) else item for item in items)


def normalize_workout_log(log: WorkoutLog) -> WorkoutLog:
    """
    Enforce the WorkoutLog invariants.

    - Exercise logs with zero sets are dropped
    - Set numbers run 1..n in their current order within each exercise log
    """
    exercises = tuple(
        ExerciseLog(
            exercise_id=exercise_log.exercise_id,
            exercise_name=exercise_log.exercise_name,
            sets=tuple(
                s.model_copy(update={"set_number": number})
                for number, s in enumerate(exercise_log.sets, start=1)
            ),
        )
        for exercise_log in log.exercises
        if exercise_log.sets
    )
    return log.model_copy(update={"exercises": exercises})


# ============================================================================
# TRANSITIONS
# ============================================================================

def _set_profile(state: RexState, action: SetProfile) -> RexState:
    return state.model_copy(update={"profile": action.profile})


def _set_habits(state: RexState, action: SetHabits) -> RexState:
    return state.model_copy(update={"habits": tuple(action.habits)})


def _set_workout_plan(state: RexState, action: SetWorkoutPlan) -> RexState:
    return state.model_copy(update={"workout_plan": action.plan})


def _set_diet_targets(state: RexState, action: SetDietTargets) -> RexState:
    return state.model_copy(update={"diet_targets": action.targets})


def _set_step(state: RexState, action: SetStep) -> RexState:
    return state.model_copy(update={"current_step": action.step})


def _complete_registration(state: RexState, action: CompleteRegistration) -> RexState:
    return state.model_copy(update={"is_registered": True})


def _log_habit(state: RexState, action: LogHabit) -> RexState:
    """
    Two-level upsert: record by date, then log by habit id within the record.
    """
    record = state.habit_record_for(action.date)

    if record is None:
        new_record = DailyHabitRecord(date=action.date, logs=(action.log,))
        return state.model_copy(update={"habit_records": state.habit_records + (new_record,)})

    logs = _upsert(record.logs, lambda l: l.habit_id == action.log.habit_id, action.log)
    habit_records = _replace_where(
        state.habit_records,
        lambda r: r.date == action.date,
        lambda r: r.model_copy(update={"logs": logs}),
    )
    return state.model_copy(update={"habit_records": habit_records})


def _upsert_workout_log(state: RexState, action: UpsertWorkoutLog) -> RexState:
    log = normalize_workout_log(action.log)
    workout_logs = _upsert(state.workout_logs, lambda l: l.date == log.date, log)
    return state.model_copy(update={"workout_logs": workout_logs})


def _add_additional_exercise(state: RexState, action: AddAdditionalExercise) -> RexState:
    """
    Upsert an ad hoc exercise by id into the date's log.

    A date without a log gets a minimal one (gym variant, no plan exercises)
    holding just this exercise.
    """
    existing = state.workout_log_for(action.date)

    if existing is None:
        new_log = WorkoutLog(
            date=action.date,
            plan_type="gym",
            exercises=(),
            additional_exercises=(action.exercise,),
        )
        return state.model_copy(update={"workout_logs": state.workout_logs + (new_log,)})

    additional = _upsert(
        existing.additional_exercises,
        lambda e: e.id == action.exercise.id,
        action.exercise,
    )
    workout_logs = _replace_where(
        state.workout_logs,
        lambda l: l.date == action.date,
        lambda l: l.model_copy(update={"additional_exercises": additional}),
    )
    return state.model_copy(update={"workout_logs": workout_logs})


def _remove_additional_exercise(state: RexState, action: RemoveAdditionalExercise) -> RexState:
    if state.workout_log_for(action.date) is None:
        return state

    workout_logs = _replace_where(
        state.workout_logs,
        lambda l: l.date == action.date,
        lambda l: l.model_copy(update={
            "additional_exercises": tuple(
                e for e in l.additional_exercises if e.id != action.exercise_id
            )
        }),
    )
    return state.model_copy(update={"workout_logs": workout_logs})


def _log_meal(state: RexState, action: LogMeal) -> RexState:
    """Append-only: create the date's diet log if absent, else add the meal at the end."""
    if state.diet_log_for(action.date) is None:
        new_log = DailyDietLog(date=action.date, meals=(action.meal,))
        return state.model_copy(update={"diet_logs": state.diet_logs + (new_log,)})

    diet_logs = _replace_where(
        state.diet_logs,
        lambda l: l.date == action.date,
        lambda l: l.model_copy(update={"meals": l.meals + (action.meal,)}),
    )
    return state.model_copy(update={"diet_logs": diet_logs})


def _delete_meal(state: RexState, action: DeleteMeal) -> RexState:
    diet_log = state.diet_log_for(action.date)
    if diet_log is None or not any(m.id == action.meal_id for m in diet_log.meals):
        return state

    diet_logs = _replace_where(
        state.diet_logs,
        lambda l: l.date == action.date,
        lambda l: l.model_copy(update={
            "meals": tuple(m for m in l.meals if m.id != action.meal_id)
        }),
    )
    return state.model_copy(update={"diet_logs": diet_logs})


def _log_note(state: RexState, action: LogNote) -> RexState:
    notes = _upsert(state.notes, lambda n: n.date == action.note.date, action.note)
    return state.model_copy(update={"notes": notes})


def _update_profile(state: RexState, action: UpdateProfile) -> RexState:
    """Shallow merge of the fields set on the payload. No profile, no change."""
    if state.profile is None:
        return state

    changes = {name: getattr(action.changes, name) for name in action.changes.model_fields_set}
    return state.model_copy(update={"profile": state.profile.model_copy(update=changes)})


def _load_state(state: RexState, action: LoadState) -> RexState:
    return action.state


def _reset(state: RexState, action: Reset) -> RexState:
    return initial_state()


_TRANSITIONS: Dict[type, Callable[[RexState, object], RexState]] = {
    SetProfile: _set_profile,
    SetHabits: _set_habits,
    SetWorkoutPlan: _set_workout_plan,
    SetDietTargets: _set_diet_targets,
    SetStep: _set_step,
    CompleteRegistration: _complete_registration,
    LogHabit: _log_habit,
    UpsertWorkoutLog: _upsert_workout_log,
    AddAdditionalExercise: _add_additional_exercise,
    RemoveAdditionalExercise: _remove_additional_exercise,
    LogMeal: _log_meal,
    DeleteMeal: _delete_meal,
    LogNote: _log_note,
    UpdateProfile: _update_profile,
    LoadState: _load_state,
    Reset: _reset,
}

_missing = set(ACTION_TYPES) - set(_TRANSITIONS)
if _missing:
    raise RuntimeError(
        f"No transition registered for: {', '.join(sorted(t.__name__ for t in _missing))}"
    )


def reduce(state: RexState, action) -> RexState:
    """
    Apply one action to the aggregate and return the new aggregate.

    Args:
        state: Current aggregate (left untouched)
        action: One of the Action variants

    Returns:
        RexState: The aggregate after the transition

    Raises:
        TypeError: If `action` is not an Action variant (programming error)

    Example:
        state = reduce(initial_state(), SetStep(step=2))
        state.current_step  # 2
    """
    transition = _TRANSITIONS.get(type(action))
    if transition is None:
        raise TypeError(f"Unknown action type: {type(action).__name__}")
    return transition(state, action)


# ============================================================================
# STORE
# ============================================================================

class RexStore:
    """
    Holder of the current aggregate.

    Actions are applied one at a time in the order received. After each
    transition, subscribers are notified and the new aggregate is persisted.
    A failed save never interrupts dispatching: the in-memory aggregate stays
    the source of truth, the failure is logged and exposed through
    `last_persist_error` / `on_persist_error`, and the save is retried with
    exponential backoff on the cooperative scheduler.

    Example:
        store = RexStore(persister=persister, scheduler=scheduler)
        store.load()
        store.dispatch(LogHabit(date="2024-01-15", log=HabitLog(habit_id="h1", completed=True)))
    """

    def __init__(
        self,
        state: Optional[RexState] = None,
        persister=None,
        scheduler=None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        on_persist_error: Optional[Callable[[PersistenceError], None]] = None
    ):
        self._state = state if state is not None else initial_state()
        self._persister = persister
        self._scheduler = scheduler
        self._max_retries = settings.PERSIST_MAX_RETRIES if max_retries is None else max_retries
        self._backoff_base = settings.PERSIST_BACKOFF_BASE_SECONDS if backoff_base is None else backoff_base
        self._on_persist_error = on_persist_error
        self._subscribers: List[Callable[[RexState], None]] = []
        self._retry_task = None
        self._failed_attempts = 0
        self.last_persist_error: Optional[PersistenceError] = None

    @property
    def state(self) -> RexState:
        return self._state

    def dispatch(self, action) -> RexState:
        """
        Apply `action`, notify subscribers, persist. Returns the new aggregate.

        The new aggregate is persisted even when a subscriber raises; the
        subscriber's exception propagates after the save.
        """
        self._state = reduce(self._state, action)
        logger.debug(f"Applied {type(action).__name__}")

        try:
            for callback in list(self._subscribers):
                callback(self._state)
        finally:
            # A newer aggregate supersedes any pending retry; its retry budget starts over
            self._failed_attempts = 0
            self._persist()
        return self._state

    def subscribe(self, callback: Callable[[RexState], None]) -> Callable[[], None]:
        """
        Register a callback run after every transition.

        Returns:
            A function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def load(self) -> RexState:
        """
        Restore the persisted aggregate, if any.

        Absent (or unreadable) storage leaves the default aggregate in place.
        """
        if self._persister is None:
            return self._state

        try:
            snapshot = self._persister.load()
        except PersistenceError as e:
            error_logger.log_error(e, severity="error", context={"operation": "load"})
            snapshot = None

        if snapshot is not None:
            self.dispatch(LoadState(state=snapshot))
        return self._state

    # Persistence
    # -----------

    def _persist(self):
        if self._persister is None:
            return

        if self._retry_task is not None:
            self._retry_task.cancel()
            self._retry_task = None

        try:
            self._persister.save(self._state)
        except PersistenceError as e:
            self._handle_persist_failure(e)
            return

        if self.last_persist_error is not None:
            logger.info("State saved after earlier failure")
        self._failed_attempts = 0
        self.last_persist_error = None

    def _handle_persist_failure(self, error: PersistenceError):
        self._failed_attempts += 1
        self.last_persist_error = error
        error_logger.log_error(
            error,
            severity="warning",
            context={"operation": "save", "attempt": self._failed_attempts},
        )

        if self._on_persist_error is not None:
            self._on_persist_error(error)

        if self._scheduler is None or self._failed_attempts > self._max_retries:
            return

        # 2, 4, 8 seconds with the default base
        delay = self._backoff_base ** self._failed_attempts
        logger.info(f"Retrying save in {delay}s (retry {self._failed_attempts}/{self._max_retries})")
        self._retry_task = self._scheduler.call_later(delay, self._retry_persist)

    def _retry_persist(self):
        self._retry_task = None
        self._persist()
