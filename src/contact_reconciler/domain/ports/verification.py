"""Port for the external email verification service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from contact_reconciler.domain.model import EmailVerificationStatus


@runtime_checkable
class EmailVerifier(Protocol):
    """Callable port returning a deliverability status per normalized email.

    Emails missing from the returned mapping are treated as unverified.
    """

    def __call__(self, emails: Collection[str]) -> Mapping[str, EmailVerificationStatus]: ...


__all__ = ["EmailVerifier"]
