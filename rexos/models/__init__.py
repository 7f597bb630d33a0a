"""
Database Models Module
Contains SQLAlchemy ORM models for all database tables.

All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from rexos.db.base import Base
from rexos.models.base import BaseModel
from rexos.models.state_blob import StateBlob
from rexos.models.error_log import ErrorLog

__all__ = [
    "Base",
    "BaseModel",
    "StateBlob",
    "ErrorLog",
]
