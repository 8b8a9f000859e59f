"""Contact records as seen by the reconciliation core.

Three shapes flow through a run:
- ``RawCandidateContact``: one extracted observation, immutable
- ``NormalizedContact``: the shape proposed for storage
- ``StoredContact``: a persisted record from the repository snapshot

``ContactPatch`` is the partial payload proposed for an existing record.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

from .enums import Confidence, ContactType

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from .enums import EmailVerificationStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class RawCandidateContact:
    """A contact candidate produced by extraction or a data provider."""

    name: str
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    company: str | None = None
    contact_type: ContactType = ContactType.INDIVIDUAL
    context: str | None = None
    source_url: str | None = None
    confidence: Confidence = Confidence.MEDIUM
    is_priority_contact: bool = False
    address: str | None = None
    linkedin_url: str | None = None
    website_url: str | None = None

    @property
    def contact_channels(self) -> tuple[str, ...]:
        """Non-blank ways of reaching this contact."""

        values = (self.email, self.phone, self.address, self.linkedin_url, self.website_url)
        return tuple(value for value in values if value and value.strip())


@dataclass(slots=True, kw_only=True)
class NormalizedContact:
    name: str
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    company: str | None = None
    source_url: str | None = None
    email_verification_result: EmailVerificationStatus | None = None


@dataclass(slots=True, kw_only=True)
class StoredContact:
    """A persisted contact belonging to one lead."""

    id: str
    lead_id: str
    name: str
    created_at: datetime
    updated_at: datetime
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    company: str | None = None
    source_url: str | None = None
    email_verification_result: EmailVerificationStatus | None = None
    manually_reviewed: bool = False
    strategy_status: str = "none"


@dataclass(slots=True, kw_only=True)
class ContactPatch:
    """Fields proposed for an existing contact; ``None`` means "leave as is"."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    company: str | None = None
    source_url: str | None = None
    updated_at: datetime | None = None
    email_verification_result: EmailVerificationStatus | None = None

    def changes(self) -> dict[str, object]:
        return dict(self._set_fields())

    def _set_fields(self) -> Iterator[tuple[str, object]]:
        for item in fields(self):
            value = getattr(self, item.name)
            if value is not None:
                yield item.name, value


@dataclass(slots=True, kw_only=True)
class ContactUpdate:
    id: str
    data: ContactPatch = field(default_factory=ContactPatch)
