"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the inbound contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``) and convert
themselves into domain entities with ``to_entity()``.

- ``AddressDTO``: nested address; every field optional.
- ``CreateCustomerDTO``: input for customer registration.
- ``UpdateCustomerDTO``: input for customer updates.

Pass ``context={"validate_tax_id": True}`` to ``model_validate`` to have
the tax identifier checked as a CPF with *validate-docbr*.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from validate_docbr import CPF

from modules.customers.entities import Address, Customer


def _sanitize_tax_id(value):
    if not isinstance(value, str):
        return value
    return re.sub(r"\D", "", value)


def _check_cpf(tax_id: Optional[str], info: ValidationInfo) -> None:
    if not tax_id or not (info.context or {}).get("validate_tax_id"):
        return
    if not CPF().validate(tax_id):
        raise ValueError("Invalid CPF number.")


# ---------------------------------------------------------------------------
# Nested
# ---------------------------------------------------------------------------


class AddressDTO(BaseModel):
    """Address sub-shape.  An omitted (or ``null``) field is "not supplied"."""

    model_config = ConfigDict(frozen=True)

    street: Optional[str] = Field(default=None, max_length=255)
    number: Optional[str] = Field(default=None, max_length=20)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    city: Optional[str] = Field(default=None, max_length=120)
    state: Optional[str] = Field(default=None, max_length=60)

    def to_entity(self) -> Address:
        return Address(**self.model_dump())


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer registration requests.

    Validates:
    - ``tax_id`` is sanitised (non-digits stripped) and must not be empty.
    - ``name`` must not be blank.
    - Field lengths fit the ``customers`` columns.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=255)
    tax_id: str = Field(max_length=14)
    birth_date: Optional[date] = None
    address: Optional[AddressDTO] = None

    @field_validator("tax_id", mode="before")
    @classmethod
    def sanitize_tax_id(cls, v):
        """Strip non-digit characters (accept formatted or raw input)."""
        return _sanitize_tax_id(v)

    @field_validator("tax_id")
    @classmethod
    def tax_id_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Tax identifier is required.")
        return v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank.")
        return v

    @model_validator(mode="after")
    def validate_tax_id(self, info: ValidationInfo) -> Self:
        _check_cpf(self.tax_id, info)
        return self

    def to_entity(self) -> Customer:
        return Customer(
            name=self.name,
            tax_id=self.tax_id,
            birth_date=self.birth_date,
            address=self.address.to_entity() if self.address else None,
        )


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer update requests.

    ``name`` and ``birth_date`` replace the stored values as sent, so an
    omitted field clears them.  ``address`` is merged field by field and
    left alone when omitted.  ``tax_id`` is accepted for symmetry with the
    create payload but never changes the stored value.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, max_length=255)
    tax_id: Optional[str] = Field(default=None, max_length=14)
    birth_date: Optional[date] = None
    address: Optional[AddressDTO] = None

    @field_validator("tax_id", mode="before")
    @classmethod
    def sanitize_tax_id(cls, v):
        return _sanitize_tax_id(v)

    @model_validator(mode="after")
    def validate_tax_id(self, info: ValidationInfo) -> Self:
        _check_cpf(self.tax_id, info)
        return self

    def to_entity(self) -> Customer:
        return Customer(
            name=self.name,
            tax_id=self.tax_id,
            birth_date=self.birth_date,
            address=self.address.to_entity() if self.address else None,
        )
