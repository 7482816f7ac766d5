"""Unit tests for the failure taxonomy and the envelope exception handler."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from rest_framework import status
from rest_framework.exceptions import NotFound, ParseError

from modules.core.exceptions import (
    ConflictError,
    MalformedIdentifier,
    NotFoundError,
    ValidationFailed,
    envelope_exception_handler,
    format_pydantic_errors,
)
from modules.customers.dtos import CreateCustomerDTO

pytestmark = pytest.mark.unit


def _handle(exc):
    return envelope_exception_handler(exc, {"view": None})


class TestDomainErrors:
    @pytest.mark.parametrize(
        ("exc", "expected_status"),
        [
            (NotFoundError("Order not found."), status.HTTP_404_NOT_FOUND),
            (MalformedIdentifier("Invalid Order ID format."), status.HTTP_400_BAD_REQUEST),
            (ValidationFailed("Invalid status provided."), status.HTTP_400_BAD_REQUEST),
            (ConflictError("Taken."), status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_status_mapping(self, exc, expected_status):
        response = _handle(exc)
        assert response.status_code == expected_status
        assert response.data == {"success": False, "error": exc.message}

    def test_default_message(self):
        assert NotFoundError().message == "Resource not found."

    def test_field_errors_take_precedence(self):
        response = _handle(ValidationFailed(errors=["name: required"]))
        assert response.data["error"] == ["name: required"]


class TestForeignErrors:
    def test_pydantic_errors_flattened(self):
        with pytest.raises(ValidationError) as exc_info:
            CreateCustomerDTO(name=" ", email="ana@example.com")

        assert format_pydantic_errors(exc_info.value) == [
            "name: Customer name is required."
        ]
        response = _handle(exc_info.value)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == ["name: Customer name is required."]

    def test_drf_exceptions_keep_their_status(self):
        response = _handle(ParseError("JSON parse error"))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"success": False, "error": "JSON parse error"}

        response = _handle(NotFound())
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unhandled_error_is_500(self):
        response = _handle(RuntimeError("database exploded"))
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            "success": False,
            "error": "Server Error",
            "message": "database exploded",
        }
