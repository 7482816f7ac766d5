"""Performance regression tests: constant query count (N+1 prevention).

List and retrieve endpoints must run a bounded number of SQL queries
regardless of how many orders and lines exist.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.dtos import OrderLineDTO, PlaceOrderDTO
from modules.products.models import Product

pytestmark = pytest.mark.performance


@pytest.fixture()
def products():
    return [
        Product.objects.create(
            name=f"Product {i}", price=Decimal("10.00"), quantity=1000
        )
        for i in range(5)
    ]


@pytest.fixture()
def orders_with_items(order_service, customer, products):
    return [
        order_service.place_order(
            PlaceOrderDTO(
                customer_id=customer.id,
                lines=[OrderLineDTO(product_id=p.id, quantity=1) for p in products[:3]],
            )
        )
        for _ in range(10)
    ]


class TestOrderListQueryCount:
    def test_list_query_count_is_constant(
        self, api_client, orders_with_items, django_assert_max_num_queries
    ):
        """Orders joined with customers, then one prefetch each for lines
        (joined with products) and status history."""
        with django_assert_max_num_queries(3):
            response = api_client.get("/api/orders")

        assert response.status_code == 200
        assert response.json()["count"] == 10


class TestOrderRetrieveQueryCount:
    def test_retrieve_query_count_is_constant(
        self, api_client, orders_with_items, django_assert_max_num_queries
    ):
        order = orders_with_items[0]

        with django_assert_max_num_queries(3):
            response = api_client.get(f"/api/orders/{order.id}")

        assert response.status_code == 200
        assert len(response.json()["data"]["products"]) == 3
