"""Order repository interface.

Extends ``IRepository[Order]`` with the operations the order workflow
needs: locking reads, line-item replacement, status history and removal
of a loaded aggregate.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderStatusHistory
    from modules.orders.stock import ReservedLine


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes OrderItem children and
    OrderStatusHistory records.  Mutations must be atomic.
    """

    @abstractmethod
    def get_for_update(self, id: UUID) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def replace_items(self, order: Order, lines: Sequence[ReservedLine]) -> None:
        """Replace every line item of *order*, keeping the order of *lines*."""

    @abstractmethod
    def add_history(
        self,
        order: Order,
        new_status: str,
        old_status: Optional[str] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""

    @abstractmethod
    def remove(self, order: Order) -> None:
        """Delete a loaded order with its items and history."""
