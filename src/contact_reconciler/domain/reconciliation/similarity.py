"""Weighted similarity between contact-like records.

The scorer is shared by the matcher and, through ``string_similarity``, by the
intra-batch deduplicator. Both thresholds used by those stages are calibrated
against ``rapidfuzz.fuzz.ratio`` (normalized Indel similarity).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

from rapidfuzz import fuzz

from .normalize import DEFAULT_REGION, normalize_email, normalize_phone, normalize_text

if TYPE_CHECKING:
    from collections.abc import Callable


FIELD_WEIGHTS: Final[dict[str, float]] = {
    "name": 0.4,
    "email": 0.3,
    "phone": 0.2,
    "company": 0.1,
}


class ContactLike(Protocol):
    @property
    def name(self) -> str | None: ...

    @property
    def email(self) -> str | None: ...

    @property
    def phone(self) -> str | None: ...

    @property
    def company(self) -> str | None: ...


def string_similarity(left: str, right: str) -> float:
    """Return a similarity in ``[0, 1]`` between two strings."""

    return fuzz.ratio(left, right) / 100.0


def contact_similarity(
    left: ContactLike,
    right: ContactLike,
    *,
    region: str = DEFAULT_REGION,
) -> float:
    """Score how likely ``left`` and ``right`` describe the same contact.

    Equal normalized emails or phones short-circuit to ``1.0``. Otherwise the
    score is ``weighted_similarity``.
    """

    left_email, right_email = normalize_email(left.email), normalize_email(right.email)
    if left_email and right_email and left_email == right_email:
        return 1.0

    left_phone = normalize_phone(left.phone, region)
    right_phone = normalize_phone(right.phone, region)
    if left_phone and right_phone and left_phone == right_phone:
        return 1.0

    return weighted_similarity(left, right, region=region)


def weighted_similarity(
    left: ContactLike,
    right: ContactLike,
    *,
    region: str = DEFAULT_REGION,
) -> float:
    """Weighted average over the fields present on both sides.

    Fields missing on either side count in neither numerator nor denominator.
    Records with no comparable field score ``0.0``.
    """

    comparable = {
        "name": (normalize_text(left.name), normalize_text(right.name)),
        "email": (normalize_email(left.email), normalize_email(right.email)),
        "phone": (normalize_phone(left.phone, region), normalize_phone(right.phone, region)),
        "company": (normalize_text(left.company), normalize_text(right.company)),
    }
    return _weighted_score(comparable, string_similarity)


def _weighted_score(
    comparable: dict[str, tuple[str | None, str | None]],
    similarity: Callable[[str, str], float],
) -> float:
    total = 0.0
    weight_used = 0.0
    for field_name, (left_value, right_value) in comparable.items():
        if not left_value or not right_value:
            continue
        weight = FIELD_WEIGHTS[field_name]
        total += weight * similarity(left_value, right_value)
        weight_used += weight
    if weight_used == 0.0:
        return 0.0
    return total / weight_used
