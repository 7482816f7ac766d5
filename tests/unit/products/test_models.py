"""Unit tests for the Product model."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductModel:
    def test_defaults(self):
        product = Product.objects.create(name="Bolt", price=Decimal("0.10"))
        assert product.quantity == 0
        assert product.description == ""
        assert product.image_url == ""

    def test_fields_trimmed_on_save(self):
        product = Product.objects.create(
            name="  Bolt ", price=Decimal("1.00"), category=" Hardware "
        )
        product.refresh_from_db()
        assert product.name == "Bolt"
        assert product.category == "Hardware"

    def test_has_stock_for(self, widget):
        assert widget.has_stock_for(5)
        assert not widget.has_stock_for(6)

    def test_negative_quantity_rejected_by_database(self, widget):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.filter(id=widget.id).update(quantity=-1)

    def test_negative_price_rejected_by_database(self, widget):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.filter(id=widget.id).update(price=Decimal("-1.00"))

    def test_name_unique(self, widget):
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(name="Widget", price=Decimal("1.00"))

    def test_updated_at_stamped_on_partial_save(self, widget):
        before = widget.updated_at
        widget.quantity = 4
        widget.save(update_fields=["quantity"])
        widget.refresh_from_db()
        assert widget.quantity == 4
        assert widget.updated_at > before
