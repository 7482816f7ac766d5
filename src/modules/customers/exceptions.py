"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API exception handler renders them into the response envelope.
"""

from __future__ import annotations

from modules.core.exceptions import ConflictError, NotFoundError


class CustomerAlreadyExists(ConflictError):
    """A customer with the same email already exists."""

    default_message = "Customer with this email already exists."


class CustomerNotFound(NotFoundError):
    """The requested customer does not exist."""

    default_message = "Customer not found."
