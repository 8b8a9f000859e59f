"""``ContactRepository`` implementation over the SQLAlchemy contact store.

Every port call runs in its own unit of work, so concurrent creates from the
plan executor never share a session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .unit_of_work import SqlAlchemyContactUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from contact_reconciler.domain.model import ContactUpdate, NormalizedContact, StoredContact


log = logging.getLogger(__name__)


@dataclass(slots=True)
class SqlAlchemyContactRepository:
    unit_of_work_factory: Callable[[], SqlAlchemyContactUnitOfWork] = SqlAlchemyContactUnitOfWork

    def list_contacts(self, lead_id: str) -> list[StoredContact]:
        with self.unit_of_work_factory() as uow:
            return uow.contacts.list_for_lead(lead_id)

    def create_contact(self, lead_id: str, contact: NormalizedContact) -> StoredContact:
        with self.unit_of_work_factory() as uow:
            stored = uow.contacts.insert(lead_id, contact)
            uow.commit()
        log.debug("Created contact %s for lead %s", stored.id, lead_id)
        return stored

    def update_contacts(
        self,
        lead_id: str,
        updates: Sequence[ContactUpdate],
    ) -> list[StoredContact]:
        """Apply all ``updates`` in one transaction; any missing id rolls back all."""

        if not updates:
            return []
        with self.unit_of_work_factory() as uow:
            updated = uow.contacts.apply_patches(
                lead_id,
                [(update.id, update.data) for update in updates],
            )
            uow.commit()
        log.debug("Updated %s contacts for lead %s", len(updated), lead_id)
        return updated


if TYPE_CHECKING:
    from contact_reconciler.domain.ports import ContactRepository

    _repository_check: ContactRepository = SqlAlchemyContactRepository()
