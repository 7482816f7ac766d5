"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
Missing customers and products reuse ``CustomerNotFound`` and
``ProductNotFound`` from their own modules.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError, ValidationFailed


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    default_message = "Order not found."


class InvalidQuantity(ValidationFailed):
    """A line requests a non-positive quantity."""

    default_message = "Quantity must be positive."


class InsufficientStock(ValidationFailed):
    """A line requests more units than the product has in stock."""

    default_message = "Not enough stock."


class InvalidOrderStatus(ValidationFailed):
    """The requested status is not one of the known order statuses."""

    default_message = "Invalid status provided."


class ClosedOrderModification(ValidationFailed):
    """A completed or cancelled order was asked for more than a status change."""

    default_message = "Cannot modify a completed or cancelled order."
