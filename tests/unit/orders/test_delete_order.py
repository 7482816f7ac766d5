"""Unit tests for OrderService.delete_order."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.dtos import AmendOrderDTO, OrderLineDTO, PlaceOrderDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.products.models import Product

pytestmark = pytest.mark.unit


@pytest.fixture()
def order(order_service, customer, widget, gadget):
    return order_service.place_order(
        PlaceOrderDTO(
            customer_id=customer.id,
            lines=[
                OrderLineDTO(product_id=widget.id, quantity=3),
                OrderLineDTO(product_id=gadget.id, quantity=10),
            ],
        )
    )


def _stock(product):
    product.refresh_from_db()
    return product.quantity


class TestDeleteOrder:
    def test_pending_order_returns_stock(self, order_service, order, widget, gadget):
        order_service.delete_order(str(order.id))

        assert _stock(widget) == 5
        assert _stock(gadget) == 50
        assert not Order.objects.filter(id=order.id).exists()
        assert not OrderItem.objects.filter(order_id=order.id).exists()
        assert not OrderStatusHistory.objects.filter(order_id=order.id).exists()

    def test_completed_order_keeps_stock_consumed(
        self, order_service, order, widget
    ):
        order_service.amend_order(order.id, AmendOrderDTO(status="completed"))
        order_service.delete_order(order.id)

        assert _stock(widget) == 2
        assert not Order.objects.filter(id=order.id).exists()

    def test_cancelled_order_does_not_release_again(
        self, order_service, order, widget
    ):
        order_service.amend_order(order.id, AmendOrderDTO(status="cancelled"))
        order_service.delete_order(order.id)
        assert _stock(widget) == 5

    def test_reopened_order_without_reservation(self, order_service, order, widget):
        order_service.amend_order(order.id, AmendOrderDTO(status="cancelled"))
        order_service.amend_order(order.id, AmendOrderDTO(status="pending"))
        order_service.delete_order(order.id)
        assert _stock(widget) == 5

    def test_deleted_product_is_skipped(self, order_service, order, widget, gadget):
        Product.objects.filter(id=gadget.id).delete()

        order_service.delete_order(order.id)

        assert _stock(widget) == 5
        assert not Product.objects.filter(id=gadget.id).exists()

    def test_not_found(self, order_service):
        with pytest.raises(OrderNotFound):
            order_service.delete_order(uuid4())
