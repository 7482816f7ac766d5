"""Product model with name uniqueness and stock control.

Business rules implemented:
- Name is required and unique (trimmed before saving).
- Price must not be negative.
- Stock quantity must not be negative: enforced by the DTOs, by
  ``PositiveIntegerField`` and by a database check constraint, so no
  order workflow can persist a negative stock.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Product aggregate root.

    ``quantity`` is the quantity in stock; order workflows reserve and
    release it (see ``modules.orders.stock``).
    """

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=120, blank=True, default="")
    image_url = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="products_quantity_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def has_stock_for(self, requested: int) -> bool:
        """Return ``True`` when *requested* units can be taken from stock."""
        return self.quantity >= requested

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        self.name = (self.name or "").strip()
        self.description = (self.description or "").strip()
        self.category = (self.category or "").strip()
        self.image_url = (self.image_url or "").strip()
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity} in stock)"
