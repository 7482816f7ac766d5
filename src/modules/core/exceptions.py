"""Failure taxonomy shared by every domain module, and its HTTP rendering.

Services raise subclasses of ``DomainError``; they never know about HTTP.
``envelope_exception_handler`` is installed as DRF's ``EXCEPTION_HANDLER``
and renders every failure as ``{"success": false, "error": ...}``:

- ``NotFoundError``        -> 404
- ``MalformedIdentifier``  -> 400 (an id that can never exist)
- ``ValidationFailed``     -> 400 (``error`` carries field-level messages)
- ``ConflictError``        -> 400 (uniqueness violations)
- Pydantic ``ValidationError`` -> 400, one ``"field: message"`` per error
- DRF ``APIException`` / ``Http404`` -> their own status code
- anything else            -> 500 ``{"error": "Server Error", "message": ...}``
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class DomainError(Exception):
    """Base class for failures detected by the service layer."""

    default_message = "The request could not be processed."

    def __init__(
        self, message: Optional[str] = None, *, errors: Optional[List[str]] = None
    ) -> None:
        self.message = message or self.default_message
        self.errors = list(errors) if errors else []
        super().__init__(self.message)


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    default_message = "Resource not found."


class MalformedIdentifier(NotFoundError):
    """An identifier is not well-formed, so no entity can match it."""

    default_message = "Invalid ID format."


class ValidationFailed(DomainError):
    """Input or state violates a business rule."""

    default_message = "Validation failed."


class ConflictError(DomainError):
    """A uniqueness constraint would be violated."""

    default_message = "Resource already exists."


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, MalformedIdentifier):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def format_pydantic_errors(exc: PydanticValidationError) -> List[str]:
    """Flatten Pydantic errors into ``"field: message"`` strings."""
    messages = []
    for error in exc.errors():
        message = error["msg"].removeprefix("Value error, ")
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return messages


def _flatten_drf_detail(detail: Any) -> Union[str, List[str]]:
    if isinstance(detail, dict):
        if set(detail) == {"detail"}:
            return str(detail["detail"])
        messages: List[str] = []
        for field, value in detail.items():
            values = value if isinstance(value, list) else [value]
            messages.extend(f"{field}: {item}" for item in values)
        return messages
    if isinstance(detail, list):
        return [str(item) for item in detail]
    return str(detail)


def envelope_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    """DRF exception handler producing the ``{success, error, message}`` envelope."""
    view = context.get("view")
    log = logger.bind(view=type(view).__name__ if view else None)

    if isinstance(exc, DomainError):
        status_code = _status_for(exc)
        log.info(
            "api.domain_error",
            error_type=type(exc).__name__,
            status_code=status_code,
            detail=exc.message,
        )
        return Response(
            {"success": False, "error": exc.errors or exc.message},
            status=status_code,
        )

    if isinstance(exc, PydanticValidationError):
        errors = format_pydantic_errors(exc)
        log.info("api.invalid_payload", errors=errors)
        return Response(
            {"success": False, "error": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        response.data = {
            "success": False,
            "error": _flatten_drf_detail(response.data),
        }
        return response

    log.exception("api.unhandled_error", error_type=type(exc).__name__)
    return Response(
        {"success": False, "error": "Server Error", "message": str(exc)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
