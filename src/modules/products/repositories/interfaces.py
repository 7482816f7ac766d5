"""Product repository interface.

Extends ``IRepository[Product]`` with the name look-up (unique-name rule)
and the locking reads and stock writes used by the order workflow.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its (unique) name."""

    @abstractmethod
    def get_for_update(self, id: UUID) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Used by catalog edits so they serialize with stock writers.
        Returns ``None`` if the product does not exist.
        """

    @abstractmethod
    def get_many_for_update(self, ids: Iterable[UUID]) -> Dict[UUID, Product]:
        """Retrieve products by ID with row-level locks (SELECT FOR UPDATE).

        Rows are locked in ascending ID order so concurrent workflows never
        deadlock.  IDs that do not exist are absent from the result.
        """

    @abstractmethod
    def save_stock(self, product: Product) -> Product:
        """Persist only the stock quantity (and ``updated_at``) of a product."""
