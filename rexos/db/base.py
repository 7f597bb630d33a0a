"""
SQLAlchemy Declarative Base
Defines the base class for all SQLAlchemy models.

All database models should inherit from the Base class defined here.
This provides ORM functionality and table creation capabilities.
"""

from sqlalchemy.orm import declarative_base

# Declarative base class for all models
# The state blob and the diagnostics error log both inherit from this base.
# SQLAlchemy uses this to track all models and create their tables.
#
# Usage:
#     from rexos.db.base import Base
#
#     class StateBlob(Base):
#         __tablename__ = "state_blobs"
#         key = Column(String, unique=True)
#         ...
Base = declarative_base()
