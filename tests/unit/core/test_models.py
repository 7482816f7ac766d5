"""Unit tests for BaseModel bookkeeping (UUIDv7 ids, timestamps)."""

import pytest

from modules.customers.models import Customer

pytestmark = pytest.mark.unit


class TestBaseModel:
    def test_id_is_uuid7(self, customer):
        assert customer.id.version == 7

    def test_save_stamps_updated_at(self, customer):
        created_at, updated_at = customer.created_at, customer.updated_at
        customer.name = "Ana Maria"
        customer.save()
        customer.refresh_from_db()
        assert customer.updated_at > updated_at
        assert customer.created_at == created_at

    def test_partial_save_also_stamps_updated_at(self, customer):
        updated_at = customer.updated_at
        customer.phone = "555"
        customer.save(update_fields=["phone"])
        customer.refresh_from_db()
        assert customer.phone == "555"
        assert customer.updated_at > updated_at
