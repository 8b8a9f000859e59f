"""Ports for reading and writing stored contacts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contact_reconciler.domain.model import ContactUpdate, NormalizedContact, StoredContact


@runtime_checkable
class ContactReader(Protocol):
    """Snapshot access to the contacts already stored for a lead."""

    def list_contacts(self, lead_id: str) -> Sequence[StoredContact]: ...


@runtime_checkable
class ContactWriter(Protocol):
    """Write access used when executing a batch plan.

    ``create_contact`` is called once per new record and may run concurrently
    with other creates. ``update_contacts`` receives the whole update half of a
    plan in one call.
    """

    def create_contact(self, lead_id: str, contact: NormalizedContact) -> StoredContact: ...

    def update_contacts(
        self,
        lead_id: str,
        updates: Sequence[ContactUpdate],
    ) -> Sequence[StoredContact]: ...


@runtime_checkable
class ContactRepository(ContactReader, ContactWriter, Protocol):
    """Combined read/write contract for a lead-scoped contact store."""
