"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API exception handler renders them into the response envelope.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class ProductAlreadyExists(ConflictError):
    """A product with the same name already exists."""

    default_message = "Product with this name already exists."


class ProductNotFound(NotFoundError):
    """The requested product does not exist."""

    default_message = "Product not found."
