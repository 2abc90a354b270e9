"""
API Exceptions - Custom Exception Classes for HireLink API

This module provides custom exception classes for standardized error handling:
- Resource exceptions (not found, duplicates)
- Permission exceptions
- Application lifecycle exceptions (invalid transitions, invalid amounts)
- Standardized error responses

All exceptions follow a consistent format:
{
    "success": false,
    "data": null,
    "message": "Human-readable message",
    "error_code": "MACHINE_READABLE_CODE",
    "errors": [...],
    "meta": {...}
}
"""

import logging
from typing import Any, Dict, List

from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class HireLinkAPIException(APIException):
    """
    Root of the HireLink error taxonomy.

    Subclasses set status_code and default_code; error_code is what clients
    switch on, extra_data lands in the response meta.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _("An unexpected error occurred.")
    default_code = "ERROR"

    def __init__(self, detail: str = None, code: str = None, extra_data: Dict = None):
        self.error_code = code or self.default_code
        self.extra_data = extra_data or {}
        super().__init__(detail=detail if detail is not None else str(self.default_detail), code=code)


# =============================================================================
# RESOURCE EXCEPTIONS
# =============================================================================

class ResourceNotFoundError(HireLinkAPIException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("The requested resource was not found.")
    default_code = "NOT_FOUND"

    def __init__(self, resource_type: str = None, resource_id: Any = None, **kwargs):
        detail = str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type
            detail = f"{resource_type} not found."

        if resource_id is not None:
            extra_data['resource_id'] = str(resource_id)
            detail = f"{resource_type or 'Resource'} with ID '{resource_id}' not found."

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class ResourceAlreadyExistsError(HireLinkAPIException):
    """Raised when trying to create a duplicate resource."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = _("A resource with these details already exists.")
    default_code = "ALREADY_EXISTS"

    def __init__(
        self,
        resource_type: str = None,
        conflicting_fields: List[str] = None,
        **kwargs
    ):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if resource_type:
            extra_data['resource_type'] = resource_type

        if conflicting_fields:
            extra_data['conflicting_fields'] = conflicting_fields

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


# =============================================================================
# PERMISSION EXCEPTIONS
# =============================================================================

class PermissionDeniedError(HireLinkAPIException):
    """Raised when the actor may not perform the requested action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("You do not have permission to perform this action.")
    default_code = "PERMISSION_DENIED"

    def __init__(self, action: str = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if action:
            extra_data['action'] = action
        super().__init__(extra_data=extra_data, **kwargs)


# =============================================================================
# APPLICATION LIFECYCLE EXCEPTIONS
# =============================================================================

class InvalidTransitionError(HireLinkAPIException):
    """Raised when a status change is not an edge of the lifecycle table."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = _("This status change is not allowed.")
    default_code = "INVALID_TRANSITION"

    def __init__(
        self,
        current_status: str = None,
        requested_status: str = None,
        reason: str = None,
        **kwargs
    ):
        detail = kwargs.pop('detail', None) or str(self.default_detail)
        extra_data = kwargs.pop('extra_data', {})

        if current_status and requested_status:
            extra_data['current_status'] = current_status
            extra_data['requested_status'] = requested_status
            detail = f"Cannot change status from '{current_status}' to '{requested_status}'."

        if reason:
            extra_data['reason'] = reason
            detail = f"{detail} {reason}"

        super().__init__(detail=detail, extra_data=extra_data, **kwargs)


class InvalidAmountError(HireLinkAPIException):
    """Raised when a payment amount or fee percentage is out of range."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = _("Payment amount must be greater than zero.")
    default_code = "INVALID_AMOUNT"

    def __init__(self, amount: Any = None, **kwargs):
        extra_data = kwargs.pop('extra_data', {})
        if amount is not None:
            extra_data['amount'] = str(amount)
        super().__init__(extra_data=extra_data, **kwargs)


class ApplicationNotAllowedError(HireLinkAPIException):
    """Raised when a user cannot apply to a job."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("You cannot apply to this job.")
    default_code = "APPLICATION_NOT_ALLOWED"


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def error_envelope(message: str, error_code: str, errors: List = None, meta: Dict = None) -> Dict:
    """Body shared by every error response."""
    return {
        "success": False,
        "data": None,
        "message": message,
        "error_code": error_code,
        "errors": errors or [],
        "meta": {
            "timestamp": timezone.now().isoformat(),
            **(meta or {}),
        },
    }


def _validation_errors(detail) -> List[Dict]:
    if isinstance(detail, dict):
        return [
            {"field": name, "messages": [str(m) for m in msgs] if isinstance(msgs, list) else [str(msgs)]}
            for name, msgs in detail.items()
        ]
    if isinstance(detail, list):
        return [{"field": "non_field_errors", "messages": [str(m) for m in detail]}]
    return [{"field": "non_field_errors", "messages": [str(detail)]}]


def hirelink_exception_handler(exc, context):
    """
    Render every API error in the HireLink envelope.

    HireLink exceptions carry their own error_code and extra_data (merged
    into meta); DRF validation errors are flattened into per-field
    messages; anything DRF does not handle becomes a 500 INTERNAL_ERROR.
    """
    response = exception_handler(exc, context)

    if response is None:
        logger.exception(f"Unhandled exception in {context.get('view').__class__.__name__}: {exc}")
        return Response(
            error_envelope("An unexpected error occurred.", "INTERNAL_ERROR"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, HireLinkAPIException):
        body = error_envelope(str(exc.detail), exc.error_code, meta=exc.extra_data)
    elif isinstance(exc, ValidationError):
        errors = _validation_errors(exc.detail)
        message = "Validation failed." if isinstance(exc.detail, dict) else errors[0]["messages"][0]
        body = error_envelope(message, "VALIDATION_ERROR", errors=errors)
    else:
        body = error_envelope(
            str(getattr(exc, 'detail', exc)),
            getattr(exc, 'default_code', 'ERROR'),
        )

    response.data = body
    return response
