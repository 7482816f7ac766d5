"""Unit tests for CustomerDjangoRepository."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.customers.exceptions import CustomerAlreadyExists
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CustomerDjangoRepository()


class TestCustomerRepository:
    def test_save_normalises_fields(self, repo):
        customer = repo.save(
            Customer(name="  Ana  ", email=" ANA@Example.com ", phone=" 123 ")
        )
        customer.refresh_from_db()
        assert customer.name == "Ana"
        assert customer.email == "ana@example.com"
        assert customer.phone == "123"

    def test_duplicate_email_becomes_conflict(self, repo, customer):
        with pytest.raises(CustomerAlreadyExists):
            repo.save(Customer(name="Other", email=customer.email))

    def test_get_by_email_is_case_insensitive(self, repo, customer):
        assert repo.get_by_email("ANA@EXAMPLE.COM") == customer

    def test_get_by_id_missing_returns_none(self, repo):
        assert repo.get_by_id(uuid4()) is None

    def test_list_with_filters(self, repo, customer):
        Customer.objects.create(name="Bruno", email="bruno@example.com")
        assert [c.name for c in repo.list({"name__icontains": "bru"})] == ["Bruno"]
        assert len(repo.list()) == 2

    def test_delete(self, repo, customer):
        assert repo.delete(customer.id) is True
        assert repo.delete(customer.id) is False
        assert not Customer.objects.filter(id=customer.id).exists()
