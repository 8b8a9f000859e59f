from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from contact_reconciler.adapters.extraction import (
    ExtractedContactPayload,
    parse_extracted_contact,
    parse_extracted_contacts,
    parse_extraction_output,
)
from contact_reconciler.domain.model import Confidence, ContactType


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Intake / Client Intake Team",
        "email": "intake@TopDogLaw.com",
        "phone": "+18445762116",
        "title": "Client Intake",
        "company": None,
        "contactType": "department",
        "context": "Primary intake email and phone listed on the Contact page",
        "isPriorityContact": False,
        "address": None,
        "linkedinUrl": None,
        "websiteUrl": None,
        "sourceUrl": "https://topdoglaw.com/contact/",
        "confidence": "high",
    }
    payload.update(overrides)
    return payload


def test_parse_camel_case_payload() -> None:
    candidate = parse_extracted_contact(_payload())

    assert candidate.name == "Intake / Client Intake Team"
    assert candidate.contact_type is ContactType.DEPARTMENT
    assert candidate.confidence is Confidence.HIGH
    assert candidate.source_url == "https://topdoglaw.com/contact/"
    assert candidate.is_priority_contact is False


def test_payload_accepts_field_names() -> None:
    payload = ExtractedContactPayload.model_validate(
        {"name": "Jane Doe", "contact_type": "office", "linkedin_url": "https://li/jane"}
    )

    assert payload.contact_type is ContactType.OFFICE
    assert payload.linkedin_url == "https://li/jane"


def test_blank_strings_become_none() -> None:
    candidate = parse_extracted_contact(_payload(company="  ", phone="", websiteUrl=" "))

    assert candidate.company is None
    assert candidate.phone is None
    assert candidate.website_url is None


def test_missing_optional_fields_use_defaults() -> None:
    candidate = parse_extracted_contact(
        {"name": "Jane Doe", "confidence": None, "isPriorityContact": None, "contactType": None}
    )

    assert candidate.confidence is Confidence.MEDIUM
    assert candidate.is_priority_contact is False
    assert candidate.contact_type is ContactType.INDIVIDUAL


def test_enum_values_are_case_insensitive() -> None:
    candidate = parse_extracted_contact(_payload(contactType="Office", confidence=" LOW "))

    assert candidate.contact_type is ContactType.OFFICE
    assert candidate.confidence is Confidence.LOW


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"name": None},
        {"contactType": "robot"},
        {"confidence": "certain"},
    ],
)
def test_invalid_payload_raises(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        parse_extracted_contact(_payload(**overrides))


def test_parse_extracted_contacts_skips_invalid_items(caplog: pytest.LogCaptureFixture) -> None:
    payloads: list[object] = [
        _payload(name="James Helm", contactType="individual"),
        _payload(name=""),
        "not an object",
        _payload(contactType="robot"),
        _payload(),
    ]

    with caplog.at_level(logging.WARNING):
        candidates = parse_extracted_contacts(payloads)

    assert [candidate.name for candidate in candidates] == [
        "James Helm",
        "Intake / Client Intake Team",
    ]
    assert "#1" in caplog.text
    assert "#2" in caplog.text
    assert "#3" in caplog.text


def test_parse_extraction_output_returns_summary() -> None:
    candidates, summary = parse_extraction_output(
        {"contacts": [_payload(), {"name": ""}], "summary": "Found intake team"}
    )

    assert len(candidates) == 1
    assert summary == "Found intake team"


def test_parse_extraction_output_tolerates_missing_contacts() -> None:
    candidates, summary = parse_extraction_output({"contacts": None, "summary": "  "})

    assert candidates == []
    assert summary is None
