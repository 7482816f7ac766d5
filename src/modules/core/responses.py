"""Success side of the API envelope: ``{success, data, count?, message?}``."""

from __future__ import annotations

from typing import Any, Optional

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    data: Any,
    *,
    status: int = http_status.HTTP_200_OK,
    count: Optional[int] = None,
    message: Optional[str] = None,
) -> Response:
    body: dict[str, Any] = {"success": True}
    if count is not None:
        body["count"] = count
    body["data"] = data
    if message:
        body["message"] = message
    return Response(body, status=status)
