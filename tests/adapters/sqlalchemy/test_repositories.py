from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from contact_reconciler.adapters.sqlalchemy import ContactNotFoundError
from contact_reconciler.domain.model import (
    ContactPatch,
    ContactUpdate,
    EmailVerificationStatus,
    NormalizedContact,
)

if TYPE_CHECKING:
    from contact_reconciler.adapters.sqlalchemy import SqlAlchemyContactRepository


def test_create_and_list_round_trip(sqlite_contact_repository: SqlAlchemyContactRepository) -> None:
    repository = sqlite_contact_repository
    created = repository.create_contact(
        "lead-1",
        NormalizedContact(
            name="Jane Doe",
            email="jane@example.com",
            phone="+16502530000",
            title="CEO",
            email_verification_result=EmailVerificationStatus.OK,
        ),
    )

    (listed,) = repository.list_contacts("lead-1")

    assert listed == created
    assert listed.lead_id == "lead-1"
    assert listed.email_verification_result is EmailVerificationStatus.OK
    assert listed.manually_reviewed is False
    assert listed.strategy_status == "none"
    assert listed.created_at.tzinfo is not None


def test_list_is_scoped_to_lead(sqlite_contact_repository: SqlAlchemyContactRepository) -> None:
    repository = sqlite_contact_repository
    repository.create_contact("lead-1", NormalizedContact(name="Jane Doe"))
    repository.create_contact("lead-2", NormalizedContact(name="John Roe"))

    assert [contact.name for contact in repository.list_contacts("lead-2")] == ["John Roe"]
    assert repository.list_contacts("lead-3") == []


def test_update_applies_only_set_fields(
    sqlite_contact_repository: SqlAlchemyContactRepository,
) -> None:
    repository = sqlite_contact_repository
    created = repository.create_contact(
        "lead-1",
        NormalizedContact(name="Jane Doe", email="jane@example.com", title="CTO"),
    )
    updated_at = datetime(2030, 1, 1, tzinfo=UTC)

    (updated,) = repository.update_contacts(
        "lead-1",
        [ContactUpdate(id=created.id, data=ContactPatch(title="CEO", updated_at=updated_at))],
    )

    assert updated.title == "CEO"
    assert updated.email == "jane@example.com"
    assert updated.updated_at == updated_at
    assert updated.created_at == created.created_at


def test_update_with_unknown_id_rolls_back_whole_batch(
    sqlite_contact_repository: SqlAlchemyContactRepository,
) -> None:
    repository = sqlite_contact_repository
    created = repository.create_contact("lead-1", NormalizedContact(name="Jane Doe", title="CTO"))
    other_lead = repository.create_contact("lead-2", NormalizedContact(name="John Roe"))

    with pytest.raises(ContactNotFoundError) as exc:
        repository.update_contacts(
            "lead-1",
            [
                ContactUpdate(id=created.id, data=ContactPatch(title="CEO")),
                ContactUpdate(id=other_lead.id, data=ContactPatch(title="Intruder")),
            ],
        )

    assert exc.value.contact_id == other_lead.id
    (unchanged,) = repository.list_contacts("lead-1")
    assert unchanged.title == "CTO"


def test_empty_update_batch_is_a_no_op(
    sqlite_contact_repository: SqlAlchemyContactRepository,
) -> None:
    assert sqlite_contact_repository.update_contacts("lead-1", []) == []
