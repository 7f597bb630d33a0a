"""
State Blob Model
Key-value storage for the serialized RexOS aggregate.

RexOS keeps its whole state as one JSON document under one fixed key
(settings.STORAGE_KEY). The table can hold more keys, but the application
only ever reads and writes that one row.
"""

from sqlalchemy import Column, String, Text

from rexos.models.base import BaseModel


class StateBlob(BaseModel):
    """
    A single stored document.

    Fields:
        key: Storage key, unique (e.g. "rexos_data")
        value: JSON document text
    """
    __tablename__ = "state_blobs"

    key = Column(String(255), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<StateBlob(key={self.key}, size={len(self.value or '')})>"
