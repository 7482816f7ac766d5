"""Order domain constants.

An order is ``pending`` while it holds reserved stock that may still be
amended; ``completed`` and ``cancelled`` orders are closed.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


CLOSED_STATES: frozenset[str] = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)

CLOSED_STATUS_UPDATED_MESSAGE = "Order status updated."
