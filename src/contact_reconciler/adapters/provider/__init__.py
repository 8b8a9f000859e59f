"""Public interface for the company-employee data provider adapter."""

from __future__ import annotations

from .schema import CompanyEmployeesPayload, EmployeePayload
from .translator import (
    candidates_from_company_employees,
    candidates_from_employees,
    determine_priority,
)

__all__ = [
    "CompanyEmployeesPayload",
    "EmployeePayload",
    "candidates_from_company_employees",
    "candidates_from_employees",
    "determine_priority",
]
