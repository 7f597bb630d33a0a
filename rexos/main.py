"""
Main Application Wiring
Entry point for embedding RexOS in a front end.

`create_app()` builds every collaborator explicitly and hands them to the
caller as a RexApp; nothing is kept in module-level state. The front end
passes the app (or its store) to whatever needs the aggregate.

Startup tasks:
    - Configure logging
    - Create the database tables if they don't exist
    - Configure error logging against the same database
    - Restore the persisted aggregate
"""

import logging
import time
from typing import Callable, Optional

from rexos.core.config import settings
from rexos.db.session import create_session_factory
from rexos.schemas.state import RexState
from rexos.services.error_logging import configure_error_logging, configure_logging
from rexos.services.persistence import StatePersister
from rexos.services.scheduler import CooperativeScheduler, NoteAutoSaver
from rexos.services.state_store import RexStore


logger = logging.getLogger(__name__)


class RexApp:
    """
    A wired RexOS instance.

    Attributes:
        store: The state store (dispatch actions here)
        scheduler: Cooperative scheduler; call `tick()` regularly to run due timers
        notes: Debounced note auto-saver
        persister: Key-value persistence of the aggregate
    """

    def __init__(self, store: RexStore, scheduler: CooperativeScheduler, notes: NoteAutoSaver, persister: StatePersister):
        self.store = store
        self.scheduler = scheduler
        self.notes = notes
        self.persister = persister

    @property
    def state(self) -> RexState:
        return self.store.state

    def dispatch(self, action) -> RexState:
        return self.store.dispatch(action)

    def tick(self) -> int:
        """Run due timers (note saves, save retries). Returns how many ran."""
        return self.scheduler.run_due()

    def shutdown(self):
        """Save a pending note edit before exit."""
        self.notes.flush()


def create_app(
    database_url: Optional[str] = None,
    clock: Optional[Callable[[], float]] = None
) -> RexApp:
    """
    Build a RexApp on the given local store.

    Args:
        database_url: SQLAlchemy URL (defaults to settings.DATABASE_URL)
        clock: Monotonic clock for the scheduler (tests pass a fake one)

    Example:
        app = create_app("sqlite:///rexos.db")
        app.dispatch(LogHabit(date=today(), log=HabitLog(habit_id=habit.id, completed=True)))
    """
    configure_logging()

    session_factory = create_session_factory(database_url)
    configure_error_logging(session_factory)

    scheduler = CooperativeScheduler(clock or time.monotonic)
    persister = StatePersister(session_factory)
    store = RexStore(persister=persister, scheduler=scheduler)
    store.load()

    notes = NoteAutoSaver(store, scheduler)

    logger.info(f"{settings.PROJECT_NAME} started (registered: {store.state.is_registered})")
    return RexApp(store=store, scheduler=scheduler, notes=notes, persister=persister)
