"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from contact_reconciler.adapters.extraction import parse_extraction_output
from contact_reconciler.adapters.provider import candidates_from_company_employees
from contact_reconciler.adapters.sqlalchemy import SqlAlchemyContactRepository, is_started, startup
from contact_reconciler.config import get_reconciliation_config
from contact_reconciler.domain.contact_sync import ContactSyncService, SyncContactsResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from contact_reconciler.adapters.extraction import ExtractionOutputPayload
    from contact_reconciler.adapters.provider import CompanyEmployeesPayload
    from contact_reconciler.config import ReconciliationConfig
    from contact_reconciler.domain.model import RawCandidateContact
    from contact_reconciler.domain.ports import ContactRepository, EmailVerifier


log = getLogger(__name__)


def reconcile_extracted_contacts(
    lead_id: str,
    payload: ExtractionOutputPayload | Mapping[str, object],
    *,
    repository: ContactRepository | None = None,
    verify_emails: EmailVerifier | None = None,
    config: ReconciliationConfig | None = None,
) -> SyncContactsResult:
    """Reconcile one extraction agent output into the contacts of ``lead_id``."""

    candidates, summary = parse_extraction_output(payload)
    log.info(
        "Starting contact reconciliation for lead %s from extraction output (%s candidates)",
        lead_id,
        len(candidates),
    )
    return _sync(
        lead_id,
        candidates,
        summary=summary,
        repository=repository,
        verify_emails=verify_emails,
        config=config,
    )


def reconcile_provider_employees(
    lead_id: str,
    payload: CompanyEmployeesPayload | Mapping[str, object],
    *,
    repository: ContactRepository | None = None,
    verify_emails: EmailVerifier | None = None,
    config: ReconciliationConfig | None = None,
) -> SyncContactsResult:
    """Reconcile data-provider employees into the contacts of ``lead_id``."""

    candidates = candidates_from_company_employees(payload)
    log.info(
        "Starting contact reconciliation for lead %s from provider data (%s candidates)",
        lead_id,
        len(candidates),
    )
    return _sync(
        lead_id,
        candidates,
        summary=None,
        repository=repository,
        verify_emails=verify_emails,
        config=config,
    )


def _sync(
    lead_id: str,
    candidates: Sequence[RawCandidateContact],
    *,
    summary: str | None,
    repository: ContactRepository | None,
    verify_emails: EmailVerifier | None,
    config: ReconciliationConfig | None,
) -> SyncContactsResult:
    effective_repository = repository or _default_repository()
    service = ContactSyncService(
        repository=effective_repository,
        verify_emails=verify_emails,
        config=config or get_reconciliation_config(),
    )
    result = service.sync(lead_id, candidates, summary=summary)
    log.info(f"Finished contact reconciliation for lead {lead_id}: {result.summary}")
    return result


def _default_repository() -> SqlAlchemyContactRepository:
    if not is_started():
        startup()
    return SqlAlchemyContactRepository()
