"""Unit tests for Orders domain events, handlers and on-commit publishing."""

from __future__ import annotations

import logging
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.orders.dtos import AmendOrderDTO, OrderLineDTO, PlaceOrderDTO
from modules.orders.events import (
    OrderAmended,
    OrderDeleted,
    OrderPlaced,
    OrderStatusChanged,
)
from modules.orders.handlers import (
    OrderDeletedHandler,
    OrderPlacedHandler,
    OrderStatusChangedHandler,
)
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


@pytest.fixture()
def recorder():
    """Subscribe a mock handler to every order event for the test's duration."""
    handler = MagicMock()
    event_types = (OrderPlaced, OrderAmended, OrderStatusChanged, OrderDeleted)
    for event_type in event_types:
        event_bus.subscribe(event_type, handler)
    yield handler
    for event_type in event_types:
        event_bus._handlers[event_type].remove(handler)


def _published(recorder):
    return [call.args[0] for call in recorder.handle.call_args_list]


class TestHandlers:
    def test_placed_handler_logs(self, caplog):
        event = OrderPlaced(
            aggregate_id=uuid4(), status="pending", total_amount=Decimal("30.00")
        )
        with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
            OrderPlacedHandler().handle(event)
        assert any("order.event.placed" in r.getMessage() for r in caplog.records)

    def test_status_changed_handler_logs(self, caplog):
        event = OrderStatusChanged(
            aggregate_id=uuid4(), old_status="pending", new_status="cancelled"
        )
        with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
            OrderStatusChangedHandler().handle(event)
        assert any(
            "order.event.status_changed" in r.getMessage() for r in caplog.records
        )

    def test_deleted_handler_logs(self, caplog):
        with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
            OrderDeletedHandler().handle(OrderDeleted(aggregate_id=uuid4()))
        assert any("order.event.deleted" in r.getMessage() for r in caplog.records)

    def test_handlers_registered_on_startup(self):
        assert any(
            isinstance(h, OrderPlacedHandler)
            for h in event_bus.handlers_for(OrderPlaced)
        )


class TestPublishing:
    def test_events_published_after_commit(
        self,
        order_service,
        customer,
        widget,
        recorder,
        django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            order = order_service.place_order(
                PlaceOrderDTO(
                    customer_id=customer.id,
                    lines=[OrderLineDTO(product_id=widget.id, quantity=2)],
                )
            )

        assert len(callbacks) == 1
        (placed,) = _published(recorder)
        assert isinstance(placed, OrderPlaced)
        assert placed.aggregate_id == order.id
        assert placed.total_amount == Decimal("20.00")
        assert placed.stock_reserved is True

    def test_nothing_published_without_commit(
        self,
        order_service,
        customer,
        widget,
        recorder,
        django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            order_service.place_order(
                PlaceOrderDTO(
                    customer_id=customer.id,
                    lines=[OrderLineDTO(product_id=widget.id, quantity=2)],
                )
            )
        assert len(callbacks) == 1
        recorder.handle.assert_not_called()

    def test_amend_and_delete_events(
        self,
        order_service,
        customer,
        widget,
        recorder,
        django_capture_on_commit_callbacks,
    ):
        order = order_service.place_order(
            PlaceOrderDTO(
                customer_id=customer.id,
                lines=[OrderLineDTO(product_id=widget.id, quantity=2)],
            )
        )
        with django_capture_on_commit_callbacks(execute=True):
            order_service.amend_order(
                order.id,
                AmendOrderDTO(lines=[OrderLineDTO(product_id=widget.id, quantity=1)]),
            )
            order_service.amend_order(order.id, AmendOrderDTO(status="cancelled"))
            order_service.delete_order(order.id)

        amended, changed, deleted = _published(recorder)
        assert isinstance(amended, OrderAmended)
        assert amended.line_count == 1
        assert (changed.old_status, changed.new_status) == ("pending", "cancelled")
        assert changed.stock_released is True
        assert isinstance(deleted, OrderDeleted)
        assert deleted.status == "cancelled"
        assert deleted.stock_released is False

    def test_failing_handler_does_not_fail_committed_request(
        self,
        api_client,
        customer,
        widget,
        failing_handler,
        recorder,
        django_capture_on_commit_callbacks,
    ):
        with django_capture_on_commit_callbacks(execute=True):
            response = api_client.post(
                "/api/orders",
                {
                    "customer": str(customer.id),
                    "products": [{"product": str(widget.id), "quantity": 2}],
                },
                format="json",
            )

        assert response.status_code == 201
        failing_handler.handle.assert_called_once()
        (placed,) = _published(recorder)
        assert str(placed.aggregate_id) == response.json()["data"]["id"]


@pytest.fixture()
def failing_handler():
    handler = MagicMock()
    handler.handle.side_effect = RuntimeError("handler down")
    event_bus.subscribe(OrderPlaced, handler)
    yield handler
    event_bus._handlers[OrderPlaced].remove(handler)
