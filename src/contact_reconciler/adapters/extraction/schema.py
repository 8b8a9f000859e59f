"""Pydantic models describing the contact extraction agent's output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contact_reconciler.domain.model import Confidence, ContactType


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _lower_or_default(value: object, default: object) -> object:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() or default
    return value


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtractedContactPayload(ExtractionBaseModel):
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    company: str | None = None
    contact_type: ContactType = Field(default=ContactType.INDIVIDUAL, alias="contactType")
    context: str | None = None
    source_url: str | None = Field(default=None, alias="sourceUrl")
    confidence: Confidence = Confidence.MEDIUM
    is_priority_contact: bool = Field(default=False, alias="isPriorityContact")
    address: str | None = None
    linkedin_url: str | None = Field(default=None, alias="linkedinUrl")
    website_url: str | None = Field(default=None, alias="websiteUrl")

    _normalize_optional = field_validator(
        "email",
        "phone",
        "title",
        "company",
        "context",
        "source_url",
        "address",
        "linkedin_url",
        "website_url",
        mode="before",
    )(_blank_to_none)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("contact_type", mode="before")
    @classmethod
    def _parse_contact_type(cls, value: object) -> object:
        return _lower_or_default(value, ContactType.INDIVIDUAL)

    @field_validator("confidence", mode="before")
    @classmethod
    def _parse_confidence(cls, value: object) -> object:
        return _lower_or_default(value, Confidence.MEDIUM)

    @field_validator("is_priority_contact", mode="before")
    @classmethod
    def _default_priority(cls, value: object) -> object:
        return False if value is None else value


class ExtractionOutputPayload(ExtractionBaseModel):
    """Top-level agent output.

    ``contacts`` stays raw so that one malformed entry does not reject the
    whole batch; entries are validated individually by the translator.
    """

    contacts: list[Any] = Field(default_factory=list)
    summary: str | None = None

    _normalize_summary = field_validator("summary", mode="before")(_blank_to_none)

    @field_validator("contacts", mode="before")
    @classmethod
    def _default_contacts(cls, value: object) -> object:
        return [] if value is None else value


ExtractedContactInput = ExtractedContactPayload | Mapping[str, object]
