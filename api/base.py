"""
API Base Classes - Response Envelope for HireLink API

Every successful response follows this structure:
{
    "success": true,
    "data": {...} | [...],
    "message": str | null,
    "errors": null,
    "meta": {
        "timestamp": "ISO8601"
    }
}

Error responses are produced by api.exceptions.hirelink_exception_handler.
"""

from typing import Any, Dict

from django.utils import timezone

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response


# =============================================================================
# STANDARD RESPONSE HELPERS
# =============================================================================

class APIResponse:
    """Standardized API response format for consistent client handling."""

    @staticmethod
    def success(
        data: Any = None,
        message: str = None,
        status_code: int = status.HTTP_200_OK,
        meta: Dict = None,
        request: Request = None
    ) -> Response:
        """Create a successful response."""
        response_meta = {
            "timestamp": timezone.now().isoformat(),
            **(meta or {})
        }

        if request and hasattr(request, 'request_id'):
            response_meta["request_id"] = request.request_id

        response_data = {
            "success": True,
            "data": data,
            "message": message,
            "errors": None,
            "meta": response_meta
        }
        return Response(response_data, status=status_code)

    @staticmethod
    def created(
        data: Any = None,
        message: str = "Resource created successfully",
        meta: Dict = None
    ) -> Response:
        """Create a 201 Created response."""
        return APIResponse.success(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
            meta=meta
        )
