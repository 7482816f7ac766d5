"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique (checked before writing, and by the unique index).
- Deletion removes the record only; orders keep their reference.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.identifiers import parse_identifier
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = ("name", "email", "phone", "address")


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Register a new customer.

        Raises:
            CustomerAlreadyExists: if the email is already taken.
        """
        if self._repo.get_by_email(dto.email):
            logger.warning("customer.duplicate_email")
            raise CustomerAlreadyExists()

        customer = Customer(
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            address=dto.address,
        )
        customer = self._repo.save(customer)
        logger.info("customer.created", customer_id=str(customer.id))
        return customer

    @transaction.atomic
    def update_customer(self, id: Any, dto: UpdateCustomerDTO) -> Customer:
        """Merge the supplied fields into an existing customer.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new email collides.
        """
        customer = self.get_customer(id)
        log = logger.bind(customer_id=str(customer.id))

        if dto.email is not None and dto.email != customer.email:
            existing = self._repo.get_by_email(dto.email)
            if existing and existing.id != customer.id:
                log.warning("customer.duplicate_email")
                raise CustomerAlreadyExists()

        for field in UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(customer, field, value)

        customer = self._repo.save(customer)
        log.info("customer.updated")
        return customer

    @transaction.atomic
    def delete_customer(self, id: Any) -> None:
        """Permanently delete a customer.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            CustomerNotFound: if the customer does not exist.
        """
        customer_id = parse_identifier(id, "Customer")
        if not self._repo.delete(customer_id):
            raise CustomerNotFound()
        logger.info("customer.removed", customer_id=str(customer_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[Customer]:
        """Return every customer, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: Any) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(parse_identifier(id, "Customer"))
        if not customer:
            raise CustomerNotFound()
        return customer
