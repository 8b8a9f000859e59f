"""Attach email verification results to a batch plan."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .normalize import normalize_email

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from contact_reconciler.domain.model import (
        ContactPatch,
        EmailVerificationStatus,
        NormalizedContact,
    )
    from contact_reconciler.domain.ports import EmailVerifier

    from .plan import BatchPlan


log = logging.getLogger(__name__)


def collect_plan_emails(plan: BatchPlan) -> list[str]:
    """Distinct normalized emails across the plan, in first-seen order."""

    seen: dict[str, None] = {}
    for payload in _payloads(plan):
        email = normalize_email(payload.email)
        if email:
            seen.setdefault(email, None)
    return list(seen)


def assign_email_verification(
    plan: BatchPlan,
    statuses: Mapping[str, EmailVerificationStatus],
) -> int:
    """Set ``email_verification_result`` where a status is known.

    Returns the number of payloads that received a status.
    """

    assigned = 0
    for payload in _payloads(plan):
        email = normalize_email(payload.email)
        if not email:
            continue
        status = statuses.get(email)
        if status is None:
            continue
        payload.email_verification_result = status
        assigned += 1
    return assigned


def verify_plan_emails(plan: BatchPlan, verifier: EmailVerifier) -> int:
    """Run ``verifier`` over the plan's emails and assign what it returns.

    Verification is advisory: a verifier failure leaves the plan untouched.
    """

    emails = collect_plan_emails(plan)
    if not emails:
        return 0
    try:
        statuses = verifier(emails)
    except Exception as exc:  # noqa: BLE001
        log.warning("Email verification failed for %s emails: %s", len(emails), exc)
        return 0
    assigned = assign_email_verification(plan, statuses)
    log.debug(
        "Assigned verification results to %s payloads (%s emails checked)",
        assigned,
        len(emails),
    )
    return assigned


def _payloads(plan: BatchPlan) -> Iterator[NormalizedContact | ContactPatch]:
    yield from plan.to_create
    for update in plan.to_update:
        yield update.data
