"""Field normalization for contact reconciliation.

Responsibilities of this stage:
- canonical email/phone forms used for exact-match comparisons
- transform raw candidates into the shape proposed for storage
- avoid persistence side effects

Phone parsing goes through ``phonenumbers``; numbers it cannot validate fall
back to a digits-only form so that local fragments such as ``555-1234`` still
compare equal across spellings.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import phonenumbers

from contact_reconciler.domain.model import ContactType, NormalizedContact

if TYPE_CHECKING:
    from contact_reconciler.domain.model import RawCandidateContact


DEFAULT_REGION = "US"
_NON_DIGITS = re.compile(r"\D")
_DESCRIPTIVE_NAME_KEYWORDS = ("office", "department", "team", "support", "sales")
_NAME_SUFFIX_BY_TYPE = {
    ContactType.OFFICE: " Office",
    ContactType.DEPARTMENT: " Department",
}

log = logging.getLogger(__name__)


def normalize_email(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


def normalize_phone(value: str | None, region: str = DEFAULT_REGION) -> str | None:
    """Return a digits-only phone key with the leading country code removed."""

    cleaned = _clean(value)
    if cleaned is None:
        return None

    parsed = _parse_valid_number(cleaned, region)
    if parsed is not None:
        e164 = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
        return e164.removeprefix("+1") if e164.startswith("+1") else e164.removeprefix("+")

    digits = _NON_DIGITS.sub("", cleaned)
    return digits.removeprefix("1") or None


def format_phone_for_storage(value: str | None, region: str = DEFAULT_REGION) -> str | None:
    """Return E.164 for valid numbers, otherwise the trimmed input."""

    cleaned = _clean(value)
    if cleaned is None:
        return None
    parsed = _parse_valid_number(cleaned, region)
    if parsed is None:
        log.debug("Keeping unparsable phone number as given: %s", cleaned)
        return cleaned
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def normalize_text(value: str | None) -> str | None:
    """Lower-case and trim free text for fuzzy comparison."""

    cleaned = _clean(value)
    return cleaned.lower() if cleaned is not None else None


def to_normalized_contact(
    candidate: RawCandidateContact,
    *,
    region: str = DEFAULT_REGION,
) -> NormalizedContact:
    """Transform an extracted candidate into the shape written to the store."""

    return NormalizedContact(
        name=_descriptive_name(candidate),
        email=_clean(candidate.email),
        phone=format_phone_for_storage(candidate.phone, region),
        title=_combined_title(candidate.title, candidate.context),
        company=_clean(candidate.company),
        source_url=_clean(candidate.source_url),
    )


def _descriptive_name(candidate: RawCandidateContact) -> str:
    name = candidate.name.strip()
    suffix = _NAME_SUFFIX_BY_TYPE.get(candidate.contact_type)
    if suffix is None:
        return name
    lowered = name.lower()
    if any(keyword in lowered for keyword in _DESCRIPTIVE_NAME_KEYWORDS):
        return name
    return f"{name}{suffix}"


def _combined_title(title: str | None, context: str | None) -> str | None:
    title = _clean(title)
    context = _clean(context)
    if context is None or context == title:
        return title
    if title is None:
        return context
    return f"{title} ({context})"


def _parse_valid_number(value: str, region: str) -> phonenumbers.PhoneNumber | None:
    try:
        parsed = phonenumbers.parse(value, region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return parsed


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
