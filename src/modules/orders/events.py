"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """Raised when an order is placed."""

    customer_id: Optional[UUID] = None
    status: str = ""
    total_amount: Decimal = Decimal("0.00")
    stock_reserved: bool = False


@dataclass(frozen=True)
class OrderAmended(DomainEvent):
    """Raised when a pending order's line items are replaced."""

    total_amount: Decimal = Decimal("0.00")
    line_count: int = 0


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order moves to a different status."""

    old_status: str = ""
    new_status: str = ""
    stock_released: bool = False


@dataclass(frozen=True)
class OrderDeleted(DomainEvent):
    """Raised when an order is permanently removed."""

    status: str = ""
    stock_released: bool = False
