"""
Tests for saving and restoring the aggregate.
"""

import json

import pytest
from sqlalchemy.exc import OperationalError

from rexos.core.exceptions import PersistenceError
from rexos.models import ErrorLog, StateBlob
from rexos.schemas import HabitLog, LogHabit, LogMeal, Meal, initial_state
from rexos.services.error_logging import configure_error_logging
from rexos.services.persistence import StatePersister, deserialize_state, serialize_state
from rexos.services.state_store import reduce
from tests.conftest import MONDAY


@pytest.fixture
def logged_state(registered_state):
    state = reduce(registered_state, LogHabit(date=MONDAY, log=HabitLog(habit_id="h1", completed=True)))
    return reduce(state, LogMeal(date=MONDAY, meal=Meal(id="m1", meal_name="Lunch", calories=600, protein=45)))


def test_serialized_document_uses_camel_case(logged_state):
    document = json.loads(serialize_state(logged_state))

    assert document["isRegistered"] is True
    assert document["habitRecords"][0]["logs"][0]["habitId"] == "h1"
    assert document["dietLogs"][0]["meals"][0]["mealName"] == "Lunch"


def test_serialization_keeps_non_ascii(registered_state):
    assert "🌙" in serialize_state(registered_state)


def test_deserialize_inverts_serialize(logged_state):
    assert deserialize_state(serialize_state(logged_state)) == logged_state


def test_missing_key_loads_none(session_factory):
    assert StatePersister(session_factory).load() is None


def test_save_load_save_is_idempotent(session_factory, logged_state):
    persister = StatePersister(session_factory)
    persister.save(logged_state)
    first = persister.load_document()

    persister.save(persister.load())

    assert persister.load_document() == first


def test_save_replaces_previous_document(session_factory, registered_state):
    persister = StatePersister(session_factory)
    persister.save(initial_state())
    persister.save(registered_state)

    db = session_factory()
    try:
        assert db.query(StateBlob).count() == 1
    finally:
        db.close()
    assert persister.load() == registered_state


def test_keys_are_independent(session_factory, registered_state):
    StatePersister(session_factory, key="a").save(registered_state)
    assert StatePersister(session_factory, key="b").load() is None


def test_corrupt_document_is_logged_and_treated_as_absent(session_factory):
    configure_error_logging(session_factory)
    db = session_factory()
    try:
        db.add(StateBlob(key="rexos_data", value='{"habits": "not a list"'))
        db.commit()
    finally:
        db.close()

    assert StatePersister(session_factory).load() is None

    db = session_factory()
    try:
        entries = db.query(ErrorLog).all()
        assert len(entries) == 1
        assert entries[0].error_type == "ValidationError"
        assert entries[0].context_data["operation"] == "load"
    finally:
        db.close()


def test_clear_removes_document(session_factory, registered_state):
    persister = StatePersister(session_factory)
    persister.save(registered_state)

    persister.clear()

    assert persister.load() is None


class BrokenSession:
    """Session whose every query fails like a locked or missing database."""

    def query(self, *args):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    def rollback(self):
        pass

    def close(self):
        pass


def test_database_failures_raise_persistence_error(registered_state):
    persister = StatePersister(BrokenSession)

    with pytest.raises(PersistenceError):
        persister.save(registered_state)
    with pytest.raises(PersistenceError):
        persister.load()
    with pytest.raises(PersistenceError):
        persister.clear()
