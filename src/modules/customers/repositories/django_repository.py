"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing entity into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, models, transaction

from modules.customers.exceptions import CustomerAlreadyExists
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def queryset(self) -> models.QuerySet[Customer]:
        """Unevaluated queryset of all customers (for filter backends)."""
        return Customer.objects.all()

    def get_by_id(self, id: UUID) -> Optional[Customer]:
        return Customer.objects.filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"email__iexact": "ana@example.com"}
            {"name__icontains": "ana"}
        """
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        A unique-email violation that slipped past the service check
        (concurrent registration) surfaces as ``CustomerAlreadyExists``.
        """
        is_new = entity._state.adding
        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError as exc:
            logger.warning("customer.integrity_error", customer_id=str(entity.id))
            raise CustomerAlreadyExists() from exc
        logger.info("customer.saved", customer_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: UUID) -> bool:
        """Hard-delete a customer by ID.

        Returns ``True`` if the customer was found and removed,
        ``False`` if no customer exists with the given ID.
        """
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.deleted", customer_id=str(id))
        return bool(deleted)

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email__iexact=email.strip()).first()
