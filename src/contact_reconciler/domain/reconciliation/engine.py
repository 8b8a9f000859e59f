"""Orchestrator for the pure part of contact reconciliation.

The engine composes stage callables and the configured thresholds but does not
touch persistence. Callers fetch the stored snapshot, run ``reconcile`` and
hand the resulting plan to ``execute_batch_plan`` (see ``ContactSyncService``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contact_reconciler.config import ReconciliationConfig

from .deduplicate import deduplicate_candidates
from .match import match_contacts
from .normalize import to_normalized_contact
from .plan import plan_batch

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from contact_reconciler.domain.model import (
        NormalizedContact,
        RawCandidateContact,
        StoredContact,
    )

    from .deduplicate import DeduplicateCandidates
    from .match import MatchContacts, MatchResult
    from .plan import BatchPlan, PlanBatch


log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ReconciliationOutcome:
    """Plan and intermediate results of one reconciliation run."""

    plan: BatchPlan
    match_results: list[MatchResult]
    dropped: int


@dataclass(slots=True)
class ContactReconciliationEngine:
    """Run deduplication, normalization, matching and planning for one batch."""

    config: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    deduplicate: DeduplicateCandidates = deduplicate_candidates
    normalize: Callable[..., NormalizedContact] = to_normalized_contact
    match: MatchContacts = match_contacts
    plan: PlanBatch = plan_batch

    def reconcile(
        self,
        candidates: Sequence[RawCandidateContact],
        existing: Sequence[StoredContact],
    ) -> ReconciliationOutcome:
        """Reconcile ``candidates`` against the ``existing`` snapshot."""

        region = self.config.default_phone_region
        kept = self.deduplicate(
            candidates,
            name_threshold=self.config.duplicate_name_threshold,
            region=region,
        )
        incoming = [(candidate, self.normalize(candidate, region=region)) for candidate in kept]
        match_results = self.match(
            incoming,
            existing,
            threshold=self.config.match_threshold,
            region=region,
        )
        plan = self.plan(match_results)

        dropped = len(candidates) - len(kept)
        log.debug(
            "Reconciled %s candidates against %s stored contacts: "
            "dropped=%s create=%s update=%s",
            len(candidates),
            len(existing),
            dropped,
            len(plan.to_create),
            len(plan.to_update),
        )
        return ReconciliationOutcome(plan=plan, match_results=match_results, dropped=dropped)
