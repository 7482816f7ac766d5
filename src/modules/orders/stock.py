"""Two-phase stock accounting for the order workflow.

A ``StockLedger`` is built over product rows that the caller has already
locked.  Releases and reservations are applied to an in-memory copy of
each product's stock; nothing is written until ``commit`` runs, so a line
that fails validation leaves every product exactly as it was.

Lines are validated in caller order.  Several lines for the same product
draw from one running availability.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, List, Union
from uuid import UUID

import structlog

from modules.orders.exceptions import InsufficientStock, InvalidQuantity
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.orders.dtos import OrderLineDTO
    from modules.orders.models import OrderItem
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReservedLine:
    """A validated line with its price snapshot."""

    product: Product
    quantity: int
    price_at_order: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.price_at_order


def total_of(lines: Iterable[ReservedLine]) -> Decimal:
    return sum((line.subtotal for line in lines), Decimal("0.00"))


class StockLedger:
    """In-memory view of the stock of a set of locked products."""

    def __init__(self, products: Dict[UUID, Product]) -> None:
        self._products = products
        self._available: Dict[UUID, int] = {
            product_id: product.quantity for product_id, product in products.items()
        }

    def available(self, product_id: UUID) -> int:
        return self._available[product_id]

    def release(self, items: Iterable[OrderItem]) -> None:
        """Return each item's quantity to its product.

        Items whose product no longer exists are skipped.
        """
        for item in items:
            if item.product_id not in self._available:
                logger.warning(
                    "order.stock_release_skipped",
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                )
                continue
            self._available[item.product_id] += item.quantity
            logger.info(
                "order.stock_released",
                product_id=str(item.product_id),
                quantity=item.quantity,
                available=self._available[item.product_id],
            )

    def reserve(
        self, lines: Iterable[Union[OrderLineDTO, OrderItem]]
    ) -> List[ReservedLine]:
        """Validate *lines* in order and take them from the running availability.

        Accepts requested lines or an order's existing items.

        Raises:
            ProductNotFound: a line references a product that does not exist.
            InvalidQuantity: a line's quantity is not positive.
            InsufficientStock: a line asks for more than is available.
        """
        reserved: List[ReservedLine] = []
        for line in lines:
            product = self._products.get(line.product_id)
            if product is None:
                raise ProductNotFound(f"Product with ID {line.product_id} not found.")
            if line.quantity < 1:
                raise InvalidQuantity(
                    f"Quantity for product {product.name} must be positive."
                )
            available = self._available[product.id]
            if line.quantity > available:
                raise InsufficientStock(
                    f"Not enough stock for product: {product.name}. "
                    f"Available: {available}, Requested: {line.quantity}"
                )
            self._available[product.id] = available - line.quantity
            reserved.append(
                ReservedLine(
                    product=product,
                    quantity=line.quantity,
                    price_at_order=product.price,
                )
            )
            logger.info(
                "order.stock_reserved",
                product_id=str(product.id),
                quantity=line.quantity,
                available=self._available[product.id],
            )
        return reserved

    def commit(self, repository: IProductRepository) -> int:
        """Write every changed stock level; return the number of products written."""
        written = 0
        for product_id, product in sorted(self._products.items()):
            quantity = self._available[product_id]
            if quantity == product.quantity:
                continue
            product.quantity = quantity
            repository.save_stock(product)
            written += 1
        return written
