"""
Persistence Service
Saves and restores the RexOS aggregate in the local key-value store.

The whole aggregate is one JSON document stored under one fixed key
(settings.STORAGE_KEY) in the `state_blobs` table. Loading replaces the
aggregate wholesale; a missing key means "first start".

Serialization:
    - camelCase field names (e.g. "habitRecords", "planType")
    - keys sorted, compact separators, non-ASCII kept (habit icons are emoji)
    So save -> load -> save produces the same document.

There is no schema versioning: a stored document that no longer validates
is logged and treated as absent.
"""

import json
import logging
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rexos.core.config import settings
from rexos.core.exceptions import PersistenceError
from rexos.models.state_blob import StateBlob
from rexos.schemas.state import RexState
from rexos.services.error_logging import error_logger


logger = logging.getLogger(__name__)


def serialize_state(state: RexState) -> str:
    """
    Serialize the aggregate to its stored JSON document.

    Example:
        serialize_state(initial_state())
        # '{"currentStep":1,"dietLogs":[],"dietTargets":null,...}'
    """
    document = state.model_dump(mode="json", by_alias=True)
    return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def deserialize_state(text: str) -> RexState:
    """
    Parse a stored JSON document back into the aggregate.

    Raises:
        ValidationError: If the document does not match the aggregate shape
    """
    return RexState.model_validate_json(text)


class StatePersister:
    """
    Reads and writes the aggregate under a single key.

    Args:
        session_factory: Callable returning a new SQLAlchemy session
        key: Storage key (defaults to settings.STORAGE_KEY)

    Example:
        persister = StatePersister(create_session_factory("sqlite:///rexos.db"))
        persister.save(state)
        restored = persister.load()
    """

    def __init__(self, session_factory: Callable[[], Session], key: Optional[str] = None):
        self.session_factory = session_factory
        self.key = key or settings.STORAGE_KEY

    def save(self, state: RexState) -> None:
        """
        Store the aggregate, replacing any previous document.

        Raises:
            PersistenceError: If serialization or the database write fails
        """
        try:
            document = serialize_state(state)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to serialize state: {e}") from e

        db = self.session_factory()
        try:
            blob = db.query(StateBlob).filter(StateBlob.key == self.key).first()
            if blob is None:
                db.add(StateBlob(key=self.key, value=document))
            else:
                blob.value = document
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to save state: {e}") from e
        finally:
            db.close()

        logger.debug(f"Saved state under '{self.key}' ({len(document)} chars)")

    def load_document(self) -> Optional[str]:
        """
        Raw stored document, or None when nothing is stored yet.

        Raises:
            PersistenceError: If the database read fails
        """
        db = self.session_factory()
        try:
            blob = db.query(StateBlob).filter(StateBlob.key == self.key).first()
            return blob.value if blob is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load state: {e}") from e
        finally:
            db.close()

    def load(self) -> Optional[RexState]:
        """
        Restore the stored aggregate.

        Returns:
            RexState, or None if the key is absent or the document is unreadable

        Raises:
            PersistenceError: If the database read fails
        """
        document = self.load_document()
        if document is None:
            return None

        try:
            return deserialize_state(document)
        except ValidationError as e:
            error_logger.log_error(
                e,
                severity="error",
                context={"operation": "load", "key": self.key, "document_size": len(document)},
            )
            return None

    def clear(self) -> None:
        """
        Delete the stored document.

        Raises:
            PersistenceError: If the database write fails
        """
        db = self.session_factory()
        try:
            db.query(StateBlob).filter(StateBlob.key == self.key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to clear state: {e}") from e
        finally:
            db.close()
