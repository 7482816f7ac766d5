"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Reads eager-load the customer and each line's product so a projection
never issues one query per line.  Both references are nullable LEFT
JOINs: a deleted customer or product reads back as ``None``.

Domain events collected on the aggregate are published on the in-process
event bus once the surrounding transaction commits.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

import structlog
from django.db import models, transaction

from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository
from modules.orders.stock import ReservedLine
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def queryset(self) -> models.QuerySet[Order]:
        """Orders with customer, line products and history eager-loaded."""
        return Order.objects.select_related("customer").prefetch_related(
            models.Prefetch(
                "items", queryset=OrderItem.objects.select_related("product")
            ),
            "status_history",
        )

    def get_by_id(self, id: UUID) -> Optional[Order]:
        return self.queryset().filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional Django ORM look-ups.

        Examples of valid filters::

            {"status": "pending"}
            {"customer_id": UUID(...)}
        """
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def get_for_update(self, id: UUID) -> Optional[Order]:
        """Lock the order row and load its items.

        The customer is not joined: ``FOR UPDATE`` cannot lock the
        nullable side of an outer join.
        """
        return (
            Order.objects.select_for_update()
            .prefetch_related("items")
            .filter(id=id)
            .first()
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order and schedule its events."""
        entity.save()
        events = entity.pull_domain_events()
        if events:
            transaction.on_commit(lambda: event_bus.publish_all(events))
        logger.info(
            "order.saved",
            order_id=str(entity.id),
            status=entity.status,
            event_count=len(events),
        )
        return entity

    @transaction.atomic
    def replace_items(self, order: Order, lines: Sequence[ReservedLine]) -> None:
        OrderItem.objects.filter(order=order).delete()
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product=line.product,
                    position=position,
                    quantity=line.quantity,
                    price_at_order=line.price_at_order,
                )
                for position, line in enumerate(lines)
            ]
        )
        logger.info("order.items_replaced", order_id=str(order.id), count=len(lines))

    def add_history(
        self,
        order: Order,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order=order,
            old_status=old_status,
            new_status=new_status,
            notes=notes,
        )
        logger.info(
            "order.history_added",
            order_id=str(order.id),
            old_status=old_status,
            new_status=new_status,
        )
        return history

    @transaction.atomic
    def remove(self, order: Order) -> None:
        order_id = order.id
        events = order.pull_domain_events()
        order.delete()
        if events:
            transaction.on_commit(lambda: event_bus.publish_all(events))
        logger.info("order.deleted", order_id=str(order_id))

    @transaction.atomic
    def delete(self, id: UUID) -> bool:
        """Hard-delete an order by ID (items and history cascade)."""
        order = Order.objects.filter(id=id).first()
        if not order:
            return False
        self.remove(order)
        return True
