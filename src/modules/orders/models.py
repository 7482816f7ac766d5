"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- Every status change generates a history record (service layer).
- OrderItem snapshots the product price at placement/amendment time
  (``price_at_order``); later catalog edits never alter past orders.
- ``subtotal`` is always ``quantity * price_at_order`` and is not stored.
- ``stock_reserved`` records whether the order's lines are currently
  subtracted from product stock.
- Customer and Product references are not owned: deleting either leaves
  the reference in place (no FK constraint, ``DO_NOTHING``), and reads
  resolve a dangling reference to ``None``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import CLOSED_STATES, OrderStatus
from shared.domain.events import DomainEventMixin


def related_or_none(instance: models.Model, field: str) -> Any:
    """Return the related object behind *field*, or ``None`` if it was deleted."""
    try:
        return getattr(instance, field)
    except ObjectDoesNotExist:
        return None


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``created_at`` is the order date exposed to callers as ``orderDate``.
    """

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock_reserved: models.BooleanField = models.BooleanField(default=False)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0),
                name="orders_total_non_negative",
            ),
        ]

    @property
    def is_closed(self) -> bool:
        """Return ``True`` for ``completed`` and ``cancelled`` orders."""
        return self.status in CLOSED_STATES

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``position`` keeps the caller's line ordering.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        related_name="order_items",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    price_at_order: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "order_items"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(price_at_order__gte=0),
                name="order_items_price_non_negative",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.price_at_order

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price_at_order}"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status changes.

    ``old_status`` is ``None`` for the record written at placement.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["order", "created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} : {self.old_status} -> {self.new_status}"
