from __future__ import annotations

import pytest

from contact_reconciler.domain.model import ContactType
from contact_reconciler.domain.reconciliation.normalize import (
    format_phone_for_storage,
    normalize_email,
    normalize_phone,
    normalize_text,
    to_normalized_contact,
)
from tests.helpers.contacts import make_candidate


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("  Jane@Example.COM ", "jane@example.com"),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_email(value: str | None, expected: str | None) -> None:
    assert normalize_email(value) == expected


@pytest.mark.parametrize(
    "value",
    ["(650) 253-0000", "+1 650 253 0000", "650.253.0000", "1-650-253-0000"],
)
def test_normalize_phone_strips_country_code_from_valid_us_numbers(value: str) -> None:
    assert normalize_phone(value) == "6502530000"


def test_normalize_phone_keeps_country_code_outside_nanp() -> None:
    assert normalize_phone("+44 20 7031 3000") == "442070313000"


def test_normalize_phone_falls_back_to_digits_for_invalid_numbers() -> None:
    assert normalize_phone("555-1234") == "5551234"
    assert normalize_phone("1 555 1234") == "5551234"


def test_normalize_phone_treats_blank_as_missing() -> None:
    assert normalize_phone("  ") is None
    assert normalize_phone(None) is None
    assert normalize_phone("ext.") is None


def test_format_phone_for_storage_prefers_e164() -> None:
    assert format_phone_for_storage("(650) 253-0000") == "+16502530000"
    assert format_phone_for_storage(" 555-1234 ") == "555-1234"
    assert format_phone_for_storage("") is None


def test_normalize_text_lowercases_and_trims() -> None:
    assert normalize_text("  Acme Corp ") == "acme corp"
    assert normalize_text(" ") is None


@pytest.mark.parametrize(
    ("name", "contact_type", "expected"),
    [
        ("Phoenix", ContactType.OFFICE, "Phoenix Office"),
        ("Billing", ContactType.DEPARTMENT, "Billing Department"),
        ("Sales Team", ContactType.DEPARTMENT, "Sales Team"),
        ("Phoenix Office", ContactType.OFFICE, "Phoenix Office"),
        ("Customer Support", ContactType.OFFICE, "Customer Support"),
        ("Jane Doe", ContactType.INDIVIDUAL, "Jane Doe"),
    ],
)
def test_to_normalized_contact_applies_type_suffix(
    name: str,
    contact_type: ContactType,
    expected: str,
) -> None:
    candidate = make_candidate(name, contact_type=contact_type)

    assert to_normalized_contact(candidate).name == expected


@pytest.mark.parametrize(
    ("title", "context", "expected"),
    [
        ("Founder", "Profile on the team page", "Founder (Profile on the team page)"),
        ("Founder", "Founder", "Founder"),
        ("Founder", None, "Founder"),
        (None, "Listed in footer", "Listed in footer"),
        (" ", " ", None),
    ],
)
def test_to_normalized_contact_combines_title_and_context(
    title: str | None,
    context: str | None,
    expected: str | None,
) -> None:
    candidate = make_candidate(title=title, context=context)

    assert to_normalized_contact(candidate).title == expected


def test_to_normalized_contact_cleans_channels() -> None:
    candidate = make_candidate(
        email=" jane@example.com ",
        phone="(650) 253-0000",
        company="   ",
        source_url=" https://example.com/team ",
    )

    normalized = to_normalized_contact(candidate)

    assert normalized.email == "jane@example.com"
    assert normalized.phone == "+16502530000"
    assert normalized.company is None
    assert normalized.source_url == "https://example.com/team"
    assert normalized.email_verification_result is None
