"""Translate extraction agent payloads into raw contact candidates."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from contact_reconciler.domain.model import RawCandidateContact

from .schema import ExtractedContactPayload, ExtractionOutputPayload

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import ExtractedContactInput


log = getLogger(__name__)


def parse_extracted_contact(payload: ExtractedContactInput) -> RawCandidateContact:
    """Validate one payload; raises ``pydantic.ValidationError`` when malformed."""

    contact = _ensure_contact_payload(payload)
    return RawCandidateContact(
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
        title=contact.title,
        company=contact.company,
        contact_type=contact.contact_type,
        context=contact.context,
        source_url=contact.source_url,
        confidence=contact.confidence,
        is_priority_contact=contact.is_priority_contact,
        address=contact.address,
        linkedin_url=contact.linkedin_url,
        website_url=contact.website_url,
    )


def parse_extracted_contacts(payloads: Iterable[object]) -> list[RawCandidateContact]:
    """Translate every well-formed payload; malformed ones are logged and skipped."""

    candidates: list[RawCandidateContact] = []
    for position, payload in enumerate(payloads):
        if not isinstance(payload, (ExtractedContactPayload, Mapping)):
            log.warning(
                "Skipping extracted contact #%s: expected an object, got %s",
                position,
                type(payload).__name__,
            )
            continue
        try:
            candidates.append(parse_extracted_contact(payload))
        except ValidationError as exc:
            log.warning(
                "Skipping extracted contact #%s: %s",
                position,
                _describe_errors(exc),
            )
    return candidates


def parse_extraction_output(
    payload: ExtractionOutputPayload | Mapping[str, object],
) -> tuple[list[RawCandidateContact], str | None]:
    """Return candidates and the agent's summary from a full output payload."""

    output = (
        payload
        if isinstance(payload, ExtractionOutputPayload)
        else ExtractionOutputPayload.model_validate(payload)
    )
    return parse_extracted_contacts(output.contacts), output.summary


def _ensure_contact_payload(payload: ExtractedContactInput) -> ExtractedContactPayload:
    if isinstance(payload, ExtractedContactPayload):
        return payload
    return ExtractedContactPayload.model_validate(payload)


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
        for error in exc.errors()
    )
