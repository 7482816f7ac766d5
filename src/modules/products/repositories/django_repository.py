"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing entity into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from django.db import IntegrityError, models, transaction

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def queryset(self) -> models.QuerySet[Product]:
        """Unevaluated queryset of all products (for filter backends)."""
        return Product.objects.all()

    def get_by_id(self, id: UUID) -> Optional[Product]:
        return Product.objects.filter(id=id).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"category__iexact": "tools"}
            {"name__icontains": "widget"}
        """
        queryset = self.queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(
        self, entity: Product, update_fields: Optional[Iterable[str]] = None
    ) -> Product:
        """Persist (create or update) a product.

        With ``update_fields`` only those columns (and ``updated_at``) are
        written.  A unique-name violation that slipped past the service check
        surfaces as ``ProductAlreadyExists``.
        """
        try:
            with transaction.atomic():
                entity.save(update_fields=update_fields)
        except IntegrityError as exc:
            logger.warning("product.integrity_error", product_id=str(entity.id))
            raise ProductAlreadyExists() from exc
        logger.info("product.saved", product_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: UUID) -> bool:
        """Hard-delete a product by ID.

        Order lines referencing the product are left untouched.
        """
        deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.deleted", product_id=str(id))
        return bool(deleted)

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name.strip()).first()

    def get_for_update(self, id: UUID) -> Optional[Product]:
        return Product.objects.select_for_update().filter(id=id).first()

    def get_many_for_update(self, ids: Iterable[UUID]) -> Dict[UUID, Product]:
        unique_ids = sorted(set(ids))
        if not unique_ids:
            return {}
        products = (
            Product.objects.select_for_update().filter(id__in=unique_ids).order_by("id")
        )
        return {product.id: product for product in products}

    def save_stock(self, product: Product) -> Product:
        product.save(update_fields=["quantity"])
        return product
