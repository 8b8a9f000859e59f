"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ContactReader, ContactRepository, ContactWriter
from .verification import EmailVerifier

__all__ = [
    "ContactReader",
    "ContactRepository",
    "ContactWriter",
    "EmailVerifier",
]
