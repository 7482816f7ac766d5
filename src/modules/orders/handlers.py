"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import (
    OrderAmended,
    OrderDeleted,
    OrderPlaced,
    OrderStatusChanged,
)
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.event.placed",
            order_id=str(event.aggregate_id),
            customer_id=str(event.customer_id),
            status=event.status,
            total_amount=str(event.total_amount),
            stock_reserved=event.stock_reserved,
        )


class OrderAmendedHandler(IEventHandler[OrderAmended]):
    def handle(self, event: OrderAmended) -> None:
        logger.info(
            "order.event.amended",
            order_id=str(event.aggregate_id),
            total_amount=str(event.total_amount),
            line_count=event.line_count,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.event.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
            stock_released=event.stock_released,
        )


class OrderDeletedHandler(IEventHandler[OrderDeleted]):
    def handle(self, event: OrderDeleted) -> None:
        logger.info(
            "order.event.deleted",
            order_id=str(event.aggregate_id),
            status=event.status,
            stock_released=event.stock_released,
        )


order_placed_handler = OrderPlacedHandler()
order_amended_handler = OrderAmendedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
order_deleted_handler = OrderDeletedHandler()
