"""Field-level merge policy for matched contacts.

Incoming values win when they carry information; otherwise the stored value is
kept. Review flags, strategy status and verification results on the stored
record are never touched by a merge.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, Protocol

from contact_reconciler.domain.model import ContactPatch

if TYPE_CHECKING:
    from contact_reconciler.domain.model import NormalizedContact, StoredContact


MERGED_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "email",
    "phone",
    "title",
    "company",
    "source_url",
)


class MergeContact(Protocol):
    """Produce the patch applied to ``existing`` for a matched incoming contact."""

    def __call__(
        self,
        existing: StoredContact,
        incoming: NormalizedContact,
        *,
        now: datetime | None = None,
    ) -> ContactPatch: ...


def merge_contact(
    existing: StoredContact,
    incoming: NormalizedContact,
    *,
    now: datetime | None = None,
) -> ContactPatch:
    merged = {
        field_name: _prefer_incoming(getattr(incoming, field_name), getattr(existing, field_name))
        for field_name in MERGED_FIELDS
    }
    return ContactPatch(**merged, updated_at=now or datetime.now(UTC))


def _prefer_incoming(incoming: str | None, existing: str | None) -> str | None:
    if incoming is not None and incoming.strip():
        return incoming
    return existing
