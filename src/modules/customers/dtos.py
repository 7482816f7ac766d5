"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateCustomerDTO``: input for customer registration.
- ``UpdateCustomerDTO``: input for partial profile edits.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer registration.

    Validates:
    - ``name`` is present and not blank.
    - ``email`` is a well-formed address (``EmailStr``), lowercased.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    email: EmailStr
    phone: str = ""
    address: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Customer name is required.")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def email_normalised(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("phone", "address", mode="before")
    @classmethod
    def none_as_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer updates.

    All fields are optional: only supplied fields will be merged
    into the stored customer.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("Customer name is required.")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def email_normalised(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v
