"""SQLAlchemy adapter package for the contact store."""

from __future__ import annotations

from .mappings import contact_table, create_all_tables, metadata
from .repositories import ContactNotFoundError, SqlAlchemyContactRecords
from .store import SqlAlchemyContactRepository
from .unit_of_work import (
    SqlAlchemyContactUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "ContactNotFoundError",
    "SqlAlchemyContactRecords",
    "SqlAlchemyContactRepository",
    "SqlAlchemyContactUnitOfWork",
    "StartupError",
    "contact_table",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
