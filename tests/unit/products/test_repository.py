"""Unit tests for ProductDjangoRepository, including the locking reads
used by the order workflow."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestProductRepository:
    def test_duplicate_name_becomes_conflict(self, repo, widget):
        with pytest.raises(ProductAlreadyExists):
            repo.save(Product(name="Widget", price=Decimal("1.00")))

    def test_get_by_name(self, repo, widget):
        assert repo.get_by_name(" Widget ") == widget
        assert repo.get_by_name("Nope") is None

    def test_get_many_for_update_skips_missing_ids(self, repo, widget, gadget):
        missing = uuid4()
        products = repo.get_many_for_update([gadget.id, widget.id, missing, widget.id])
        assert set(products) == {widget.id, gadget.id}
        assert products[widget.id].quantity == 5

    def test_get_many_for_update_empty(self, repo):
        assert repo.get_many_for_update([]) == {}

    def test_save_stock_writes_quantity_only(self, repo, widget):
        Product.objects.filter(id=widget.id).update(price=Decimal("99.00"))
        widget.quantity = 1
        repo.save_stock(widget)
        widget.refresh_from_db()
        assert widget.quantity == 1
        assert widget.price == Decimal("99.00")

    def test_get_for_update(self, repo, widget):
        assert repo.get_for_update(widget.id) == widget
        assert repo.get_for_update(uuid4()) is None

    def test_save_with_update_fields_keeps_other_columns(self, repo, widget):
        Product.objects.filter(id=widget.id).update(quantity=2)
        widget.price = Decimal("12.00")

        repo.save(widget, update_fields=["price"])

        widget.refresh_from_db()
        assert widget.price == Decimal("12.00")
        assert widget.quantity == 2

    def test_delete(self, repo, widget):
        assert repo.delete(widget.id) is True
        assert repo.get_by_id(widget.id) is None
