"""Unit tests for Order DTOs (Pydantic v2)."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import AmendOrderDTO, OrderLineDTO, PlaceOrderDTO

pytestmark = pytest.mark.unit


class TestPlaceOrderDTO:
    def test_accepts_wire_names(self):
        customer_id, product_id = uuid4(), uuid4()
        dto = PlaceOrderDTO.model_validate(
            {
                "customer": str(customer_id),
                "products": [{"product": str(product_id), "quantity": 3}],
            }
        )
        assert dto.customer_id == customer_id
        assert dto.lines == [OrderLineDTO(product_id=product_id, quantity=3)]
        assert dto.status is None

    def test_accepts_field_names(self):
        dto = PlaceOrderDTO(
            customer_id=uuid4(),
            lines=[OrderLineDTO(product_id=uuid4(), quantity=1)],
            status="completed",
        )
        assert dto.status == "completed"

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one product"):
            PlaceOrderDTO.model_validate({"customer": str(uuid4()), "products": []})

    def test_missing_customer_rejected(self):
        with pytest.raises(ValidationError):
            PlaceOrderDTO.model_validate(
                {"products": [{"product": str(uuid4()), "quantity": 1}]}
            )

    def test_malformed_product_id_rejected(self):
        with pytest.raises(ValidationError):
            PlaceOrderDTO.model_validate(
                {
                    "customer": str(uuid4()),
                    "products": [{"product": "abc", "quantity": 1}],
                }
            )

    def test_non_positive_quantity_left_to_the_workflow(self):
        dto = PlaceOrderDTO.model_validate(
            {
                "customer": str(uuid4()),
                "products": [{"product": str(uuid4()), "quantity": 0}],
            }
        )
        assert dto.lines[0].quantity == 0

    def test_fractional_quantity_rejected(self):
        with pytest.raises(ValidationError):
            OrderLineDTO.model_validate({"product": str(uuid4()), "quantity": 1.5})


class TestAmendOrderDTO:
    def test_everything_optional(self):
        dto = AmendOrderDTO.model_validate({})
        assert dto.status is None
        assert dto.lines is None

    def test_products_alias(self):
        dto = AmendOrderDTO.model_validate(
            {"products": [{"product": str(uuid4()), "quantity": 2}]}
        )
        assert dto.lines[0].quantity == 2

    def test_empty_replacement_rejected(self):
        with pytest.raises(ValidationError):
            AmendOrderDTO.model_validate({"products": []})
