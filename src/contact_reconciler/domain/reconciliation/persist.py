"""Execute a batch plan through the contact repository port.

Responsibilities of this stage:
- create new contacts, each as an independent task
- send all updates to the repository as one batch
- report what the repository actually persisted

Creates tolerate partial failure: a failing create is logged and counted,
the others still run. A failing update batch aborts with ``BatchUpdateError``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contact_reconciler.domain.model import StoredContact

from .errors import BatchUpdateError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contact_reconciler.domain.model import NormalizedContact
    from contact_reconciler.domain.ports import ContactWriter

    from .plan import BatchPlan


DEFAULT_CREATE_WORKERS = 4

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PersistenceResult:
    """Summary of persisted changes for one batch plan."""

    created: list[StoredContact | None] = field(default_factory=list["StoredContact | None"])
    updated: list[StoredContact] = field(default_factory=list[StoredContact])
    failed_creates: int = 0
    requested_creates: int = 0

    @property
    def created_contacts(self) -> list[StoredContact]:
        return [contact for contact in self.created if contact is not None]

    @property
    def contacts(self) -> list[StoredContact]:
        return [*self.created_contacts, *self.updated]


def execute_batch_plan(
    plan: BatchPlan,
    *,
    lead_id: str,
    repository: ContactWriter,
    max_workers: int = DEFAULT_CREATE_WORKERS,
) -> PersistenceResult:
    """Persist ``plan`` for ``lead_id``.

    ``PersistenceResult.created`` keeps plan order; a failed create leaves
    ``None`` at its position so indexes into ``plan.to_create`` stay valid.
    """

    result = PersistenceResult(requested_creates=len(plan.to_create))
    if plan.to_create:
        result.created = _create_all(
            plan.to_create,
            lead_id=lead_id,
            repository=repository,
            max_workers=max_workers,
        )
        result.failed_creates = sum(1 for contact in result.created if contact is None)

    if plan.to_update:
        try:
            result.updated = list(repository.update_contacts(lead_id, plan.to_update))
        except Exception as exc:
            raise BatchUpdateError(
                lead_id=lead_id,
                contact_ids=tuple(update.id for update in plan.to_update),
                cause=exc,
            ) from exc

    log.info(
        "Persisted contacts for lead %s: created=%s/%s updated=%s",
        lead_id,
        result.requested_creates - result.failed_creates,
        result.requested_creates,
        len(result.updated),
    )
    return result


def _create_all(
    contacts: Sequence[NormalizedContact],
    *,
    lead_id: str,
    repository: ContactWriter,
    max_workers: int,
) -> list[StoredContact | None]:
    if max_workers <= 1:
        return [_create_one(contact, lead_id=lead_id, repository=repository) for contact in contacts]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(contacts))) as executor:
        futures = [
            executor.submit(_create_one, contact, lead_id=lead_id, repository=repository)
            for contact in contacts
        ]
        return [future.result() for future in futures]


def _create_one(
    contact: NormalizedContact,
    *,
    lead_id: str,
    repository: ContactWriter,
) -> StoredContact | None:
    try:
        return repository.create_contact(lead_id, contact)
    except Exception as exc:  # noqa: BLE001
        log.warning("Failed to create contact %r for lead %s: %s", contact.name, lead_id, exc)
        return None
