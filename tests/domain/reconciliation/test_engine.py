from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from contact_reconciler.config import ReconciliationConfig
from contact_reconciler.domain.model import (
    Confidence,
    ContactType,
    EmailVerificationStatus,
    RawCandidateContact,
)
from contact_reconciler.domain.reconciliation import ContactReconciliationEngine
from tests.helpers.contacts import make_candidate, make_stored_contact

if TYPE_CHECKING:
    from contact_reconciler.domain.model import StoredContact

LEAD_ID = "tc9kqk8m9gldal6dnauef8c7"


def _existing_contacts() -> list[StoredContact]:
    return [
        make_stored_contact(
            "d2buudrhd8n0wyaogju8l9am",
            "James Helm",
            lead_id=LEAD_ID,
            email="ryanhutchison@filevine.com",
            phone="+18445762116",
            title="Founder",
            source_url="https://www.topdoglaw.com/",
            email_verification_result=EmailVerificationStatus.OK_FOR_ALL,
            strategy_status="completed",
            updated_at=datetime(2025, 10, 2, 18, 52, 7, tzinfo=UTC),
        ),
        make_stored_contact(
            "p1tznzmpltfc4hsna9njn0lj",
            "Phoenix Office",
            lead_id=LEAD_ID,
            email="ryanzhutch@gmail.com",
            phone="+16024289331",
            title="Regional Office",
            company="Helm Law Group, LLC",
            source_url="https://www.topdoglaw.com",
            email_verification_result=EmailVerificationStatus.UNKNOWN,
            strategy_status="completed",
            updated_at=datetime(2025, 10, 2, 18, 36, 10, tzinfo=UTC),
        ),
    ]


def _shared_phone_candidates() -> list[RawCandidateContact]:
    return [
        RawCandidateContact(
            name="James Helm",
            email="ryanhutchison@filevine.com",
            phone="+18002157211",
            title="Founder, Attorney",
            company="Helm Law Group, LLC",
            context="Founder profile referenced on the site",
            source_url="https://topdoglaw.com/attorneys/",
            confidence=Confidence.HIGH,
        ),
        RawCandidateContact(
            name="Intake / Client Intake Team",
            email="intake@TopDogLaw.com",
            phone="+18445762116",
            title="Client Intake",
            contact_type=ContactType.DEPARTMENT,
            context="Primary intake email and phone listed on the Contact page",
            source_url="https://topdoglaw.com/contact/",
            confidence=Confidence.HIGH,
        ),
    ]


@pytest.mark.parametrize("reverse", [False, True], ids=["founder-first", "intake-first"])
def test_shared_phone_does_not_produce_duplicate_updates(reverse: bool) -> None:
    candidates = _shared_phone_candidates()
    if reverse:
        candidates.reverse()

    outcome = ContactReconciliationEngine().reconcile(candidates, _existing_contacts())

    plan = outcome.plan
    assert outcome.dropped == 0
    assert [update.id for update in plan.to_update] == ["d2buudrhd8n0wyaogju8l9am"]
    assert [contact.name for contact in plan.to_create] == ["Intake / Client Intake Team"]

    update = plan.to_update[0].data
    assert update.title == "Founder, Attorney (Founder profile referenced on the site)"
    assert update.company == "Helm Law Group, LLC"
    assert update.phone == "+18002157211"
    assert update.email_verification_result is None

    matched_ids = [
        result.matched_existing.id for result in outcome.match_results if result.matched_existing
    ]
    assert len(matched_ids) == len(set(matched_ids)) == 1


def test_engine_reports_dropped_candidates() -> None:
    candidates = [
        make_candidate("Jane Doe", email="jane@example.com"),
        make_candidate("Jane Doe", email="JANE@example.com"),
        make_candidate("Contact Us", email="info@example.com"),
        make_candidate(""),
    ]

    outcome = ContactReconciliationEngine().reconcile(candidates, [])

    assert outcome.dropped == 3
    assert [contact.name for contact in outcome.plan.to_create] == ["Jane Doe"]
    assert len(outcome.match_results) == 1


def test_engine_applies_configured_thresholds() -> None:
    candidates = [
        make_candidate("John Smith", email="john@example.com"),
        make_candidate("Jon Smith", email="jon@example.org"),
    ]
    existing = [make_stored_contact("c1", "John Smyth")]
    strict = ContactReconciliationEngine(
        config=ReconciliationConfig(match_threshold=0.99, duplicate_name_threshold=0.99)
    )

    outcome = strict.reconcile(candidates, existing)

    assert outcome.dropped == 0
    assert len(outcome.plan.to_create) == 2
    assert outcome.plan.to_update == []


def test_engine_output_is_deterministic() -> None:
    candidates = [
        make_candidate("Alice Walker", email="alice@example.com"),
        make_candidate("Bob Marley", email="bob@example.com", is_priority_contact=True),
    ]
    existing = [make_stored_contact("c1", "Alice Walker", email="alice@example.com")]
    engine = ContactReconciliationEngine()
    now = datetime(2025, 1, 2, tzinfo=UTC)

    first = engine.reconcile(candidates, existing)
    second = engine.reconcile(candidates, existing)

    for outcome in (first, second):
        for update in outcome.plan.to_update:
            update.data.updated_at = now
    assert first.plan == second.plan
    assert first.plan.primary_contact is not None
    assert first.plan.primary_contact.create_index == 0
