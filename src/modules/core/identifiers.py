"""Parsing of opaque entity identifiers received from callers."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from modules.core.exceptions import MalformedIdentifier


def parse_identifier(value: Any, entity: str) -> UUID:
    """Return *value* as a ``UUID`` or raise ``MalformedIdentifier``.

    ``entity`` names the kind of record in the error message
    (``"Invalid Order ID format."``).
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise MalformedIdentifier(f"Invalid {entity} ID format.") from exc
