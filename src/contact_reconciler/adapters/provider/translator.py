"""Translate data-provider employees into raw contact candidates.

Only current employees with an email are considered. They are ranked by how
relevant their role is for outreach and the top entries are kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from contact_reconciler.domain.model import (
    Confidence,
    ContactPriority,
    ContactType,
    RawCandidateContact,
)

from .schema import CompanyEmployeesPayload, EmployeePayload

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


DEFAULT_EMPLOYEE_LIMIT = 10
UNKNOWN_EMPLOYEE_NAME = "Unknown"

_EXECUTIVE_TITLE_KEYWORDS: Final = ("ceo", "chief", "president", "founder", "owner")
_SENIOR_TITLE_KEYWORDS: Final = ("vp", "vice president", "director")
_KEY_TITLE_AREAS: Final = ("sales", "business development", "partnership", "marketing")
_KEY_DEPARTMENTS: Final = ("sales", "business development")
_COMMERCIAL_TITLE_KEYWORDS: Final = (
    "sales",
    "business development",
    "account manager",
    "partnership",
    "marketing",
)
_COMMERCIAL_DEPARTMENTS: Final = ("sales", "marketing")
_PRIORITY_RANK: Final = {
    ContactPriority.HIGH: 0,
    ContactPriority.MEDIUM: 1,
    ContactPriority.LOW: 2,
}

log = getLogger(__name__)


def determine_priority(title: str | None, department: str | None = None) -> ContactPriority:
    """Rank an employee by title and department."""

    if not title:
        return ContactPriority.LOW

    title_lower = title.lower()
    department_lower = (department or "").lower()

    if _mentions(title_lower, _EXECUTIVE_TITLE_KEYWORDS):
        return ContactPriority.HIGH
    if _mentions(title_lower, _SENIOR_TITLE_KEYWORDS) and (
        _mentions(title_lower, _KEY_TITLE_AREAS) or _mentions(department_lower, _KEY_DEPARTMENTS)
    ):
        return ContactPriority.HIGH
    if _mentions(title_lower, _COMMERCIAL_TITLE_KEYWORDS) or _mentions(
        department_lower, _COMMERCIAL_DEPARTMENTS
    ):
        return ContactPriority.MEDIUM
    return ContactPriority.LOW


def candidates_from_employees(
    employees: Iterable[object],
    *,
    limit: int = DEFAULT_EMPLOYEE_LIMIT,
    company: str | None = None,
) -> list[RawCandidateContact]:
    """Return up to ``limit`` candidates, highest priority first.

    Ordering within one priority follows the provider's order. Malformed
    employee rows are logged and skipped.
    """

    ranked = sorted(
        (
            (determine_priority(employee.job_title, employee.job_department), employee)
            for employee in _valid_employees(employees)
            if employee.email
        ),
        key=lambda item: _PRIORITY_RANK[item[0]],
    )
    return [_to_candidate(employee, company=company) for _priority, employee in ranked[:limit]]


def candidates_from_company_employees(
    payload: CompanyEmployeesPayload | Mapping[str, object],
    *,
    limit: int = DEFAULT_EMPLOYEE_LIMIT,
) -> list[RawCandidateContact]:
    """Translate a full provider response, using its current employees only."""

    result = (
        payload
        if isinstance(payload, CompanyEmployeesPayload)
        else CompanyEmployeesPayload.model_validate(payload)
    )
    company = result.company.name if result.company is not None else None
    candidates = candidates_from_employees(result.employees.current, limit=limit, company=company)
    log.info(
        "Selected %s of %s current employees from provider data",
        len(candidates),
        len(result.employees.current),
    )
    return candidates


def _to_candidate(employee: EmployeePayload, *, company: str | None) -> RawCandidateContact:
    return RawCandidateContact(
        name=employee.display_name or UNKNOWN_EMPLOYEE_NAME,
        email=employee.email,
        title=employee.job_title,
        company=company,
        contact_type=ContactType.INDIVIDUAL,
        context=employee.job_department,
        confidence=Confidence.MEDIUM,
        linkedin_url=employee.linkedin_url,
    )


def _valid_employees(employees: Iterable[object]) -> Iterator[EmployeePayload]:
    for position, employee in enumerate(employees):
        if isinstance(employee, EmployeePayload):
            yield employee
            continue
        if not isinstance(employee, Mapping):
            log.warning(
                "Skipping provider employee #%s: expected an object, got %s",
                position,
                type(employee).__name__,
            )
            continue
        try:
            validated = EmployeePayload.model_validate(employee)
        except ValidationError as exc:
            log.warning("Skipping provider employee #%s: %s", position, _describe_errors(exc))
            continue
        yield validated


def _describe_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
        for error in exc.errors()
    )


def _mentions(value: str, keywords: Iterable[str]) -> bool:
    return any(keyword in value for keyword in keywords)
