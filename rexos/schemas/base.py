"""
Schema Base
Common configuration for every RexOS value record.

All entities are frozen (assignment raises), collections are tuples, and
field names are serialized in camelCase so the stored document keeps the
{"isRegistered": ..., "habitRecords": [...]} shape. Snake-case names are
accepted on input as well.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RexModel(BaseModel):
    """Immutable value record with camelCase JSON aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
