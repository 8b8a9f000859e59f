"""Batch plan types and the planner turning match results into operations.

The batch plan is the contract between:
- matching and merge policy (pure)
- email verification assignment
- persistence execution through the repository port

``to_create`` and ``to_update`` together cover every match result exactly once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from contact_reconciler.domain.model import ContactUpdate

from .errors import DuplicateUpdateTargetError
from .merge import merge_contact

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from contact_reconciler.domain.model import NormalizedContact

    from .match import MatchResult
    from .merge import MergeContact


log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class PrimaryContactRef:
    """Points at the priority contact of a plan.

    Exactly one of ``existing_id`` (the contact is updated) and
    ``create_index`` (position in ``BatchPlan.to_create``) is set.
    """

    existing_id: str | None = None
    create_index: int | None = None

    def __post_init__(self) -> None:
        if (self.existing_id is None) == (self.create_index is None):
            raise ValueError("PrimaryContactRef needs exactly one of existing_id or create_index")


@dataclass(slots=True, kw_only=True)
class BatchPlan:
    """Create and update operations for one reconciliation run."""

    to_create: list[NormalizedContact] = field(default_factory=list["NormalizedContact"])
    to_update: list[ContactUpdate] = field(default_factory=list["ContactUpdate"])
    primary_contact: PrimaryContactRef | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_create and not self.to_update


class PlanBatch(Protocol):
    """Partition match results into create and update operations."""

    def __call__(
        self,
        match_results: Sequence[MatchResult],
        *,
        now: datetime | None = None,
    ) -> BatchPlan: ...


def plan_batch(
    match_results: Sequence[MatchResult],
    *,
    now: datetime | None = None,
    merge: MergeContact = merge_contact,
) -> BatchPlan:
    """Build a ``BatchPlan`` from match results.

    Raises ``DuplicateUpdateTargetError`` when two results target the same
    stored contact.
    """

    plan = BatchPlan()
    targeted: set[str] = set()
    priority_refs: list[PrimaryContactRef] = []

    for result in match_results:
        existing = result.matched_existing
        if existing is None:
            ref = PrimaryContactRef(create_index=len(plan.to_create))
            plan.to_create.append(result.incoming)
        else:
            if existing.id in targeted:
                raise DuplicateUpdateTargetError(contact_id=existing.id)
            targeted.add(existing.id)
            ref = PrimaryContactRef(existing_id=existing.id)
            plan.to_update.append(
                ContactUpdate(id=existing.id, data=merge(existing, result.incoming, now=now))
            )
        if result.raw_candidate.is_priority_contact:
            priority_refs.append(ref)

    if len(priority_refs) == 1:
        plan.primary_contact = priority_refs[0]
    elif priority_refs:
        log.info(
            "Ignoring %s priority contacts; a primary contact needs exactly one",
            len(priority_refs),
        )
    return plan
