"""Application service reconciling an extracted contact batch into a lead."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contact_reconciler.config import ReconciliationConfig
from contact_reconciler.domain.reconciliation import (
    ContactReconciliationEngine,
    ContactSnapshotError,
    execute_batch_plan,
    verify_plan_emails,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contact_reconciler.domain.model import RawCandidateContact, StoredContact
    from contact_reconciler.domain.ports import ContactRepository, EmailVerifier
    from contact_reconciler.domain.reconciliation import PersistenceResult, PrimaryContactRef


log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class SyncContactsResult:
    """Outcome of a contact sync for one lead."""

    contacts_created: int
    contacts_updated: int
    summary: str
    contacts: list[StoredContact]
    primary_contact_id: str | None = None
    failed_creates: int = 0
    dropped: int = 0


@dataclass(slots=True)
class ContactSyncService:
    """Fetch the stored snapshot, reconcile a batch and persist the plan.

    The service holds no per-run state; one instance may serve many leads.
    """

    repository: ContactRepository
    verify_emails: EmailVerifier | None = None
    config: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    engine: ContactReconciliationEngine | None = None
    _engine: ContactReconciliationEngine = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._engine = (
            self.engine
            if self.engine is not None
            else ContactReconciliationEngine(config=self.config)
        )

    def sync(
        self,
        lead_id: str,
        candidates: Sequence[RawCandidateContact],
        *,
        summary: str | None = None,
    ) -> SyncContactsResult:
        """Reconcile ``candidates`` into the contacts stored for ``lead_id``.

        Raises ``ContactSnapshotError`` when the stored contacts cannot be read
        and ``BatchUpdateError`` when the update batch fails. Failed creates
        are reported through ``SyncContactsResult.failed_creates``.
        """

        log.info("Syncing %s contact candidates for lead %s", len(candidates), lead_id)
        existing = self._load_snapshot(lead_id)

        outcome = self._engine.reconcile(candidates, existing)
        plan = outcome.plan

        if self.verify_emails is not None:
            verify_plan_emails(plan, self.verify_emails)

        persisted = execute_batch_plan(
            plan,
            lead_id=lead_id,
            repository=self.repository,
            max_workers=self.config.create_workers,
        )

        created = len(persisted.created_contacts)
        updated = len(persisted.updated)
        result = SyncContactsResult(
            contacts_created=created,
            contacts_updated=updated,
            summary=summary or _default_summary(created, updated, outcome.dropped),
            contacts=persisted.contacts,
            primary_contact_id=_resolve_primary_contact_id(plan.primary_contact, persisted),
            failed_creates=persisted.failed_creates,
            dropped=outcome.dropped,
        )
        log.info(
            "Finished contact sync for lead %s: created=%s updated=%s failed=%s dropped=%s",
            lead_id,
            result.contacts_created,
            result.contacts_updated,
            result.failed_creates,
            result.dropped,
        )
        return result

    def _load_snapshot(self, lead_id: str) -> list[StoredContact]:
        try:
            return list(self.repository.list_contacts(lead_id))
        except Exception as exc:
            raise ContactSnapshotError(lead_id=lead_id, cause=exc) from exc


def _default_summary(created: int, updated: int, dropped: int) -> str:
    return f"Created {created} and updated {updated} contacts ({dropped} dropped)"


def _resolve_primary_contact_id(
    ref: PrimaryContactRef | None,
    persisted: PersistenceResult,
) -> str | None:
    if ref is None:
        return None
    if ref.existing_id is not None:
        return ref.existing_id
    if ref.create_index is None or ref.create_index >= len(persisted.created):
        return None
    created = persisted.created[ref.create_index]
    return created.id if created is not None else None
