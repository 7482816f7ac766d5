"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Name must be unique.
- Price and stock must not be negative (validated by the DTOs).
- Deletion removes the record only; order lines keep their reference.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.identifiers import parse_identifier
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = ("name", "price", "quantity", "description", "category", "image_url")


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Add a product to the catalog.

        Raises:
            ProductAlreadyExists: if the name is already taken.
        """
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists()

        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            quantity=dto.quantity,
            category=dto.category,
            image_url=dto.image_url,
        )
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: Any, dto: UpdateProductDTO) -> Product:
        """Merge the supplied fields into an existing product.

        The row is locked for the edit and only the supplied columns are
        written, so a concurrent order reservation is never overwritten.

        Price changes never touch existing orders: order lines carry
        their own price snapshot.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new name collides.
        """
        product = self._repo.get_for_update(parse_identifier(id, "Product"))
        if not product:
            raise ProductNotFound()
        log = logger.bind(product_id=str(product.id))

        if dto.name is not None and dto.name != product.name:
            existing = self._repo.get_by_name(dto.name)
            if existing and existing.id != product.id:
                log.warning("product.duplicate_name")
                raise ProductAlreadyExists()

        changed = []
        for field in UPDATABLE_FIELDS:
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)
                changed.append(field)

        product = self._repo.save(product, update_fields=changed)
        log.info("product.updated", fields=changed)
        return product

    @transaction.atomic
    def delete_product(self, id: Any) -> None:
        """Permanently delete a product.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            ProductNotFound: if the product does not exist.
        """
        product_id = parse_identifier(id, "Product")
        if not self._repo.delete(product_id):
            raise ProductNotFound()
        logger.info("product.removed", product_id=str(product_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return every product, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: Any) -> Product:
        """Retrieve a single product by ID.

        Raises:
            MalformedIdentifier: if ``id`` is not a valid identifier.
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(parse_identifier(id, "Product"))
        if not product:
            raise ProductNotFound()
        return product
