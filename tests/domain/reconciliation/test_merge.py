from __future__ import annotations

from datetime import UTC, datetime

from contact_reconciler.domain.model import EmailVerificationStatus, NormalizedContact
from contact_reconciler.domain.reconciliation.merge import merge_contact
from tests.helpers.contacts import make_stored_contact

NOW = datetime(2025, 10, 2, 18, 0, tzinfo=UTC)


def test_incoming_values_take_precedence() -> None:
    existing = make_stored_contact(
        "c1",
        "James Helm",
        email="old@example.com",
        phone="+16502530000",
        title="Founder",
        company="Helm Law",
        source_url="https://example.com/",
    )
    incoming = NormalizedContact(
        name="James Helm",
        email="new@example.com",
        phone="+18002157211",
        title="Founder, Attorney",
        company="Helm Law Group, LLC",
        source_url="https://example.com/attorneys/",
    )

    patch = merge_contact(existing, incoming, now=NOW)

    assert patch.changes() == {
        "name": "James Helm",
        "email": "new@example.com",
        "phone": "+18002157211",
        "title": "Founder, Attorney",
        "company": "Helm Law Group, LLC",
        "source_url": "https://example.com/attorneys/",
        "updated_at": NOW,
    }


def test_missing_or_blank_incoming_values_keep_existing() -> None:
    existing = make_stored_contact(
        "c1",
        "Jane Doe",
        email="jane@example.com",
        title="CEO",
        company="Acme",
    )
    incoming = NormalizedContact(name="Jane Doe", email=None, title="   ", company="")

    patch = merge_contact(existing, incoming, now=NOW)

    assert patch.email == "jane@example.com"
    assert patch.title == "CEO"
    assert patch.company == "Acme"
    assert patch.phone is None


def test_merge_leaves_review_state_untouched() -> None:
    existing = make_stored_contact(
        "c1",
        email="jane@example.com",
        email_verification_result=EmailVerificationStatus.OK_FOR_ALL,
        manually_reviewed=True,
        strategy_status="completed",
    )

    patch = merge_contact(existing, NormalizedContact(name="Jane Doe"), now=NOW)

    changes = patch.changes()
    assert "email_verification_result" not in changes
    assert "manually_reviewed" not in changes
    assert "strategy_status" not in changes


def test_merge_stamps_current_utc_time_by_default() -> None:
    before = datetime.now(UTC)

    patch = merge_contact(make_stored_contact("c1"), NormalizedContact(name="Jane Doe"))

    assert patch.updated_at is not None
    assert patch.updated_at.tzinfo is not None
    assert patch.updated_at >= before
