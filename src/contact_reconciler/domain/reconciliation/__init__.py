"""Reconciliation core for merging extracted contacts into a lead's contacts.

Layered flow:
1) validate and deduplicate the incoming batch
2) normalize survivors into the storage shape
3) match against the stored snapshot, one-to-one
4) merge matched pairs and plan create/update operations
5) attach email verification results
6) execute the plan through the repository port
"""

from __future__ import annotations

from .deduplicate import deduplicate_candidates
from .engine import ContactReconciliationEngine, ReconciliationOutcome
from .errors import (
    BatchUpdateError,
    ContactSnapshotError,
    DuplicateUpdateTargetError,
    ReconciliationError,
)
from .match import MatchResult, match_contacts
from .merge import merge_contact
from .normalize import normalize_email, normalize_phone, to_normalized_contact
from .persist import PersistenceResult, execute_batch_plan
from .plan import BatchPlan, PrimaryContactRef, plan_batch
from .similarity import contact_similarity, string_similarity, weighted_similarity
from .validate import is_generic_template_contact, is_valid_candidate
from .verification import assign_email_verification, collect_plan_emails, verify_plan_emails

__all__ = [
    "BatchPlan",
    "BatchUpdateError",
    "ContactReconciliationEngine",
    "ContactSnapshotError",
    "DuplicateUpdateTargetError",
    "MatchResult",
    "PersistenceResult",
    "PrimaryContactRef",
    "ReconciliationError",
    "ReconciliationOutcome",
    "assign_email_verification",
    "collect_plan_emails",
    "contact_similarity",
    "deduplicate_candidates",
    "execute_batch_plan",
    "is_generic_template_contact",
    "is_valid_candidate",
    "match_contacts",
    "merge_contact",
    "normalize_email",
    "normalize_phone",
    "plan_batch",
    "string_similarity",
    "to_normalized_contact",
    "verify_plan_emails",
    "weighted_similarity",
]
