"""Structural validation and template filtering for raw candidates.

Extraction output regularly contains boilerplate "contact us" entries scraped
from page headers and footers. They carry a generic mailbox and no individual,
so they are rejected before deduplication.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from contact_reconciler.domain.model import ContactType

if TYPE_CHECKING:
    from contact_reconciler.domain.model import RawCandidateContact


GENERIC_EMAIL_LOCAL_PARTS = frozenset(
    {
        "info",
        "contact",
        "hello",
        "general",
        "office",
        "main",
        "admin",
        "webmaster",
        "noreply",
        "no-reply",
    }
)
GENERIC_CONTACT_NAMES = frozenset(
    {
        "contact us",
        "get in touch",
        "main office",
        "headquarters",
        "customer service",
        "general inquiry",
        "information",
    }
)
TEMPLATE_SIGNAL_THRESHOLD = 2

_TEMPLATE_CONTEXT = re.compile(r"header|footer|navigation|widget", re.IGNORECASE)
_TEMPLATE_SOURCE_URL = re.compile(r"contact|footer|header", re.IGNORECASE)


def is_valid_candidate(contact: RawCandidateContact) -> bool:
    """Return whether ``contact`` is worth reconciling."""

    return rejection_reason(contact) is None


def rejection_reason(contact: RawCandidateContact) -> str | None:
    """Explain why ``contact`` is invalid, or ``None`` when it is valid."""

    if not contact.name or not contact.name.strip():
        return "missing_name"
    if is_generic_template_contact(contact):
        return "generic_template"
    if contact.contact_channels:
        return None
    if contact.contact_type is ContactType.INDIVIDUAL and len(contact.name.split()) >= 2:
        return None
    return "no_contact_channel"


def is_generic_template_contact(contact: RawCandidateContact) -> bool:
    if contact.name.strip().lower() in GENERIC_CONTACT_NAMES:
        return True
    if not _has_generic_email(contact.email):
        return False
    return _template_signal_count(contact) >= TEMPLATE_SIGNAL_THRESHOLD


def _has_generic_email(email: str | None) -> bool:
    if not email or "@" not in email:
        return False
    local_part = email.strip().lower().split("@", 1)[0]
    return local_part in GENERIC_EMAIL_LOCAL_PARTS


def _template_signal_count(contact: RawCandidateContact) -> int:
    signals = (
        bool(contact.context and _TEMPLATE_CONTEXT.search(contact.context)),
        bool(contact.source_url and _TEMPLATE_SOURCE_URL.search(contact.source_url)),
    )
    return sum(signals)
