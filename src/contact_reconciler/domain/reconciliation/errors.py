"""Exceptions raised while reconciling and persisting a contact batch."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures that abort a reconciliation run."""


class ContactSnapshotError(ReconciliationError):
    """Raised when the stored contacts of a lead cannot be loaded."""

    def __init__(self, *, lead_id: str, cause: BaseException) -> None:
        self.lead_id = lead_id
        self.cause = cause
        super().__init__(f"Failed to load existing contacts for lead {lead_id}: {cause}")


class BatchUpdateError(ReconciliationError):
    """Raised when the batched update of matched contacts fails."""

    def __init__(self, *, lead_id: str, contact_ids: tuple[str, ...], cause: BaseException) -> None:
        self.lead_id = lead_id
        self.contact_ids = contact_ids
        self.cause = cause
        super().__init__(
            f"Failed to update {len(contact_ids)} contacts for lead {lead_id}: {cause}"
        )


class DuplicateUpdateTargetError(ValueError):
    """Raised when a batch plan would update the same stored contact twice."""

    def __init__(self, *, contact_id: str) -> None:
        self.contact_id = contact_id
        super().__init__(f"Stored contact {contact_id} is targeted by more than one update")
