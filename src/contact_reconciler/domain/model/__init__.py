"""Contact domain model."""

from __future__ import annotations

from .contact import (
    ContactPatch,
    ContactUpdate,
    NormalizedContact,
    RawCandidateContact,
    StoredContact,
)
from .enums import Confidence, ContactPriority, ContactType, EmailVerificationStatus

__all__ = [
    "Confidence",
    "ContactPatch",
    "ContactPriority",
    "ContactType",
    "ContactUpdate",
    "EmailVerificationStatus",
    "NormalizedContact",
    "RawCandidateContact",
    "StoredContact",
]
