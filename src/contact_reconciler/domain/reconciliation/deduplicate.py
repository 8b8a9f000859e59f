"""Intra-batch deduplication for extracted contacts.

Responsibilities of this stage:
- drop invalid and template candidates
- collapse duplicates within one incoming batch, first occurrence wins
- avoid persistence/database lookups

Email and phone duplicates are exact on their normalized forms. Name
duplicates are fuzzy and scoped to one ``ContactType``: a person and an office
may legitimately share a near-identical label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .normalize import DEFAULT_REGION, normalize_email, normalize_phone, normalize_text
from .similarity import string_similarity
from .validate import rejection_reason

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from contact_reconciler.domain.model import ContactType, RawCandidateContact


DEFAULT_NAME_THRESHOLD = 0.8

log = logging.getLogger(__name__)


class DeduplicateCandidates(Protocol):
    """Collapse duplicate candidates in an incoming batch."""

    def __call__(
        self,
        contacts: Sequence[RawCandidateContact],
        *,
        name_threshold: float = DEFAULT_NAME_THRESHOLD,
        region: str = DEFAULT_REGION,
    ) -> list[RawCandidateContact]: ...


@dataclass(slots=True)
class _SeenIndex:
    emails: set[str] = field(default_factory=set[str])
    phones: set[str] = field(default_factory=set[str])
    names_by_type: dict[ContactType, list[str]] = field(
        default_factory=dict["ContactType", "list[str]"]
    )

    def add(self, contact: RawCandidateContact, *, region: str) -> None:
        email = normalize_email(contact.email)
        phone = normalize_phone(contact.phone, region)
        if email:
            self.emails.add(email)
        if phone:
            self.phones.add(phone)
        name = normalize_text(contact.name)
        if name:
            self.names_by_type.setdefault(contact.contact_type, []).append(name)

    def names_for(self, contact_type: ContactType) -> Iterable[str]:
        return self.names_by_type.get(contact_type, ())


def deduplicate_candidates(
    contacts: Sequence[RawCandidateContact],
    *,
    name_threshold: float = DEFAULT_NAME_THRESHOLD,
    region: str = DEFAULT_REGION,
) -> list[RawCandidateContact]:
    """Return the valid, non-duplicate candidates in input order."""

    kept: list[RawCandidateContact] = []
    seen = _SeenIndex()
    for position, contact in enumerate(contacts):
        reason = rejection_reason(contact)
        if reason is not None:
            log.warning(
                "Skipping invalid contact candidate #%s name=%r reason=%s",
                position,
                contact.name,
                reason,
            )
            continue

        duplicate_of = _duplicate_reason(
            contact,
            seen=seen,
            name_threshold=name_threshold,
            region=region,
        )
        if duplicate_of is not None:
            log.debug(
                "Dropping duplicate contact candidate #%s name=%r duplicate_by=%s",
                position,
                contact.name,
                duplicate_of,
            )
            continue

        kept.append(contact)
        seen.add(contact, region=region)

    return kept


def _duplicate_reason(
    contact: RawCandidateContact,
    *,
    seen: _SeenIndex,
    name_threshold: float,
    region: str,
) -> str | None:
    email = normalize_email(contact.email)
    if email and email in seen.emails:
        return "email"

    phone = normalize_phone(contact.phone, region)
    if phone and phone in seen.phones:
        return "phone"

    name = normalize_text(contact.name)
    if name and any(
        string_similarity(name, kept_name) > name_threshold
        for kept_name in seen.names_for(contact.contact_type)
    ):
        return "name"

    return None
