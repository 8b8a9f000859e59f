"""Session-scoped data access for the contact table."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from contact_reconciler.domain.model import StoredContact

from .mappings import contact_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from contact_reconciler.domain.model import ContactPatch, NormalizedContact


class ContactNotFoundError(LookupError):
    """Raised when a contact id does not exist for the given lead."""

    def __init__(self, *, lead_id: str, contact_id: str) -> None:
        self.lead_id = lead_id
        self.contact_id = contact_id
        super().__init__(f"Contact {contact_id} does not exist for lead {lead_id}")


class SqlAlchemyContactRecords:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_lead(self, lead_id: str) -> list[StoredContact]:
        stmt = (
            select(contact_table)
            .where(contact_table.c.lead_id == lead_id)
            .order_by(contact_table.c.created_at, contact_table.c.id)
        )
        return [_to_stored_contact(row) for row in self.session.execute(stmt)]

    def get(self, lead_id: str, contact_id: str) -> StoredContact | None:
        stmt = (
            select(contact_table)
            .where(contact_table.c.lead_id == lead_id)
            .where(contact_table.c.id == contact_id)
        )
        row = self.session.execute(stmt).one_or_none()
        return _to_stored_contact(row) if row is not None else None

    def insert(
        self,
        lead_id: str,
        contact: NormalizedContact,
        *,
        now: datetime | None = None,
    ) -> StoredContact:
        timestamp = now or datetime.now(UTC)
        stored = StoredContact(
            id=str(uuid.uuid4()),
            lead_id=lead_id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            title=contact.title,
            company=contact.company,
            source_url=contact.source_url,
            email_verification_result=contact.email_verification_result,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.session.execute(
            contact_table.insert().values(
                id=stored.id,
                lead_id=stored.lead_id,
                name=stored.name,
                email=stored.email,
                phone=stored.phone,
                title=stored.title,
                company=stored.company,
                source_url=stored.source_url,
                email_verification_result=stored.email_verification_result,
                manually_reviewed=stored.manually_reviewed,
                strategy_status=stored.strategy_status,
                created_at=stored.created_at,
                updated_at=stored.updated_at,
            )
        )
        return stored

    def apply_patch(self, lead_id: str, contact_id: str, patch: ContactPatch) -> StoredContact:
        """Write the set fields of ``patch``; raises ``ContactNotFoundError``."""

        if self.get(lead_id, contact_id) is None:
            raise ContactNotFoundError(lead_id=lead_id, contact_id=contact_id)
        values = patch.changes()
        values.setdefault("updated_at", datetime.now(UTC))
        self.session.execute(
            contact_table.update()
            .where(contact_table.c.lead_id == lead_id)
            .where(contact_table.c.id == contact_id)
            .values(**values)
        )
        updated = self.get(lead_id, contact_id)
        if updated is None:  # pragma: no cover
            raise ContactNotFoundError(lead_id=lead_id, contact_id=contact_id)
        return updated

    def apply_patches(
        self,
        lead_id: str,
        patches: Sequence[tuple[str, ContactPatch]],
    ) -> list[StoredContact]:
        return [self.apply_patch(lead_id, contact_id, patch) for contact_id, patch in patches]


def _to_stored_contact(row: Row[tuple[object, ...]]) -> StoredContact:
    mapping = row._mapping  # noqa: SLF001
    return StoredContact(**{str(key): value for key, value in mapping.items()})
