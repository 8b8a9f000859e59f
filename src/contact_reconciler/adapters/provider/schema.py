"""Pydantic models for the company-employee data provider payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ProviderBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EmployeePayload(ProviderBaseModel):
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    job_title: str | None = None
    job_department: str | None = None
    linkedin_url: str | None = None

    _normalize_optional = field_validator(
        "full_name",
        "first_name",
        "last_name",
        "email",
        "job_title",
        "job_department",
        "linkedin_url",
        mode="before",
    )(_blank_to_none)

    @property
    def display_name(self) -> str | None:
        if self.full_name:
            return self.full_name
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or None


class EmployeeGroups(ProviderBaseModel):
    """Employee rows are kept raw and validated one at a time by the translator."""

    current: list[Any] = Field(default_factory=list)
    former: list[Any] = Field(default_factory=list)

    @field_validator("current", "former", mode="before")
    @classmethod
    def _default_list(cls, value: object) -> object:
        return [] if value is None else value


class CompanyPayload(ProviderBaseModel):
    name: str | None = None

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class CompanyEmployeesPayload(ProviderBaseModel):
    employees: EmployeeGroups = Field(default_factory=EmployeeGroups)
    company: CompanyPayload | None = None
