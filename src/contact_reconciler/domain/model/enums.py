"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ContactType(StrEnum):
    INDIVIDUAL = "individual"
    OFFICE = "office"
    DEPARTMENT = "department"


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ContactPriority(StrEnum):
    """Outreach priority assigned to data-provider employees by job title."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EmailVerificationStatus(StrEnum):
    """Deliverability categories reported by the email verifier."""

    OK = "ok"
    EMAIL_DISABLED = "email_disabled"
    DEAD_SERVER = "dead_server"
    INVALID_MX = "invalid_mx"
    DISPOSABLE = "disposable"
    SPAMTRAP = "spamtrap"
    OK_FOR_ALL = "ok_for_all"
    SMTP_PROTOCOL = "smtp_protocol"
    ANTISPAM_SYSTEM = "antispam_system"
    UNKNOWN = "unknown"
    INVALID_SYNTAX = "invalid_syntax"

