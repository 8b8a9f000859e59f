"""Match incoming contacts against the stored snapshot.

Responsibilities of this stage:
- score every (incoming, existing) pair above the threshold
- assign each incoming record at most one existing record, and each existing
  record to at most one incoming record
- produce ``MatchResult`` entries without mutating persistence state

Assignment is greedy over all candidate pairs sorted by score, so the
one-to-one guarantee holds across the whole batch rather than per record.
Equal scores are broken by the weighted field score, which ignores the exact
email and phone short-circuit, then by incoming order, then by the more
recently updated existing record, then by snapshot order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .normalize import DEFAULT_REGION
from .similarity import contact_similarity, weighted_similarity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contact_reconciler.domain.model import (
        NormalizedContact,
        RawCandidateContact,
        StoredContact,
    )


DEFAULT_MATCH_THRESHOLD = 0.75

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class MatchResult:
    """Outcome of matching one incoming contact."""

    incoming: NormalizedContact
    raw_candidate: RawCandidateContact
    matched_existing: StoredContact | None = None
    score: float | None = None

    @property
    def is_new(self) -> bool:
        return self.matched_existing is None


@dataclass(frozen=True, slots=True)
class _CandidatePair:
    score: float
    field_score: float
    incoming_index: int
    existing_index: int
    updated_at_ts: float

    def sort_key(self) -> tuple[float, float, int, float, int]:
        return (
            -self.score,
            -self.field_score,
            self.incoming_index,
            -self.updated_at_ts,
            self.existing_index,
        )


class MatchContacts(Protocol):
    """Match normalized incoming contacts against stored contacts."""

    def __call__(
        self,
        incoming: Sequence[tuple[RawCandidateContact, NormalizedContact]],
        existing: Sequence[StoredContact],
        *,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        region: str = DEFAULT_REGION,
    ) -> list[MatchResult]: ...


def match_contacts(
    incoming: Sequence[tuple[RawCandidateContact, NormalizedContact]],
    existing: Sequence[StoredContact],
    *,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    region: str = DEFAULT_REGION,
) -> list[MatchResult]:
    """Return one ``MatchResult`` per incoming contact, in incoming order."""

    pairs = _candidate_pairs(incoming, existing, threshold=threshold, region=region)
    assignment = _assign_greedily(pairs)

    results: list[MatchResult] = []
    for incoming_index, (raw_candidate, normalized) in enumerate(incoming):
        pair = assignment.get(incoming_index)
        if pair is None:
            results.append(MatchResult(incoming=normalized, raw_candidate=raw_candidate))
            continue
        matched = existing[pair.existing_index]
        log.debug(
            "Matched incoming contact %r to existing contact %s (score=%.3f)",
            normalized.name,
            matched.id,
            pair.score,
        )
        results.append(
            MatchResult(
                incoming=normalized,
                raw_candidate=raw_candidate,
                matched_existing=matched,
                score=pair.score,
            )
        )
    return results


def _candidate_pairs(
    incoming: Sequence[tuple[RawCandidateContact, NormalizedContact]],
    existing: Sequence[StoredContact],
    *,
    threshold: float,
    region: str,
) -> list[_CandidatePair]:
    pairs: list[_CandidatePair] = []
    for incoming_index, (_raw, normalized) in enumerate(incoming):
        for existing_index, stored in enumerate(existing):
            score = contact_similarity(normalized, stored, region=region)
            if score <= threshold:
                continue
            pairs.append(
                _CandidatePair(
                    score=score,
                    field_score=weighted_similarity(normalized, stored, region=region),
                    incoming_index=incoming_index,
                    existing_index=existing_index,
                    updated_at_ts=stored.updated_at.timestamp(),
                )
            )
    pairs.sort(key=_CandidatePair.sort_key)
    return pairs


def _assign_greedily(pairs: Sequence[_CandidatePair]) -> dict[int, _CandidatePair]:
    assignment: dict[int, _CandidatePair] = {}
    claimed_existing: set[int] = set()
    for pair in pairs:
        if pair.incoming_index in assignment or pair.existing_index in claimed_existing:
            continue
        assignment[pair.incoming_index] = pair
        claimed_existing.add(pair.existing_index)
    return assignment
