"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).  ``image_url`` also accepts the
API's camelCase key ``imageUrl``.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_IMAGE_URL_ALIASES = AliasChoices("imageUrl", "image_url")


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is present and not blank.
    - ``price`` is a non-negative decimal with at most 2 places.
    - ``quantity`` is a non-negative integer.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    price: Decimal = Field(max_digits=12, decimal_places=2)
    quantity: int
    description: str = ""
    category: str = ""
    image_url: str = Field(default="", validation_alias=_IMAGE_URL_ALIASES)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Product name is required.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity cannot be negative.")
        return v

    @field_validator("description", "category", "image_url", mode="before")
    @classmethod
    def none_as_blank(cls, v: Any) -> Any:
        return _blank_if_none(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional: only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = None
    price: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    quantity: int | None = None
    description: str | None = None
    category: str | None = None
    image_url: str | None = Field(default=None, validation_alias=_IMAGE_URL_ALIASES)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("Product name is required.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_not_be_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Quantity cannot be negative.")
        return v
