"""SQLAlchemy table metadata for stored contacts."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from contact_reconciler.domain.model import EmailVerificationStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

CONTACT_ID_LENGTH = 36


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

contact_table = Table(
    "contact",
    metadata,
    Column("id", String(CONTACT_ID_LENGTH), primary_key=True),
    Column("lead_id", String, nullable=False),
    Column("name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("title", String, nullable=True),
    Column("company", String, nullable=True),
    Column("source_url", String, nullable=True),
    Column(
        "email_verification_result",
        Enum(EmailVerificationStatus, native_enum=False),
        nullable=True,
    ),
    Column("manually_reviewed", Boolean, nullable=False, default=False),
    Column("strategy_status", String, nullable=False, default="none"),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_contact_lead_id_created_at", "lead_id", "created_at"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the contact metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
