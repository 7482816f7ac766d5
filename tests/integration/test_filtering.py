"""Query-string filtering on the list endpoints."""

from decimal import Decimal

import pytest

from modules.customers.models import Customer
from modules.orders.dtos import AmendOrderDTO, PlaceOrderDTO
from modules.products.models import Product

pytestmark = pytest.mark.integration


def _place(order_service, customer, product, quantity=1):
    return order_service.place_order(
        PlaceOrderDTO(
            customer=customer.id,
            products=[{"product": product.id, "quantity": quantity}],
        )
    )


class TestOrderFilters:
    def test_by_status(self, api_client, order_service, customer, widget):
        kept = _place(order_service, customer, widget)
        done = _place(order_service, customer, widget)
        order_service.amend_order(done.id, AmendOrderDTO(status="completed"))

        body = api_client.get("/api/orders", {"status": "pending"}).json()

        assert body["count"] == 1
        assert body["data"][0]["id"] == str(kept.id)

    def test_by_customer(self, api_client, order_service, customer, widget):
        other = Customer.objects.create(name="Bruno Lima", email="bruno@example.com")
        _place(order_service, customer, widget)
        mine = _place(order_service, other, widget)

        body = api_client.get("/api/orders", {"customer": str(other.id)}).json()

        assert [o["id"] for o in body["data"]] == [str(mine.id)]

    def test_by_total_range(self, api_client, order_service, customer, widget, gadget):
        _place(order_service, customer, widget, 1)
        big = _place(order_service, customer, gadget, 4)

        body = api_client.get("/api/orders", {"min_total": "100"}).json()

        assert [o["id"] for o in body["data"]] == [str(big.id)]

    def test_invalid_status_filter(self, api_client):
        response = api_client.get("/api/orders", {"status": "shipped"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"][0].startswith("status:")


class TestProductFilters:
    @pytest.fixture(autouse=True)
    def catalog(self, widget, gadget):
        Product.objects.create(
            name="Desk", price=Decimal("300.00"), quantity=0, category="Furniture"
        )

    def test_by_category(self, api_client):
        body = api_client.get("/api/products", {"category": "furniture"}).json()
        assert [p["name"] for p in body["data"]] == ["Desk"]

    def test_by_min_price(self, api_client):
        body = api_client.get("/api/products", {"min_price": "20"}).json()
        assert [p["name"] for p in body["data"]] == ["Desk", "Gadget"]

    def test_in_stock(self, api_client):
        body = api_client.get("/api/products", {"in_stock": "true"}).json()
        assert [p["name"] for p in body["data"]] == ["Gadget", "Widget"]


class TestCustomerFilters:
    def test_by_email(self, api_client, customer):
        Customer.objects.create(name="Bruno Lima", email="bruno@example.com")

        body = api_client.get("/api/customers", {"email": "ANA@example.com"}).json()

        assert body["count"] == 1
        assert body["data"][0]["name"] == "Ana Souza"
