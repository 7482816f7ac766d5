"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).  Wire names (``customer``,
``products``, ``product``) are accepted as aliases of the field names.

Line quantities are only type-checked here: a non-positive quantity is
reported by the workflow, which names the offending product.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

EMPTY_ORDER_MESSAGE = "Please provide customer ID and at least one product for the order."


class OrderLineDTO(BaseModel):
    """One requested (product, quantity) pair."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: UUID = Field(validation_alias=AliasChoices("product", "product_id"))
    quantity: int


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for order placement requests.

    ``status`` is validated by the service against ``OrderStatus``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_id: UUID = Field(validation_alias=AliasChoices("customer", "customer_id"))
    lines: List[OrderLineDTO] = Field(
        validation_alias=AliasChoices("products", "lines")
    )
    status: Optional[str] = None

    @field_validator("lines")
    @classmethod
    def lines_must_not_be_empty(cls, v: List[OrderLineDTO]) -> List[OrderLineDTO]:
        if not v:
            raise ValueError(EMPTY_ORDER_MESSAGE)
        return v


class AmendOrderDTO(BaseModel):
    """Immutable DTO for order amendment requests.

    ``lines`` is a full replacement list; ``None`` leaves the lines alone.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: Optional[str] = None
    lines: Optional[List[OrderLineDTO]] = Field(
        default=None, validation_alias=AliasChoices("products", "lines")
    )

    @field_validator("lines")
    @classmethod
    def lines_must_not_be_empty(
        cls, v: Optional[List[OrderLineDTO]]
    ) -> Optional[List[OrderLineDTO]]:
        if v is not None and not v:
            raise ValueError("An order must contain at least one product.")
        return v
