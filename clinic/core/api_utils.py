"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from flask import jsonify, request

from clinic.core.exceptions import (
    AlreadyExistError,
    AppointmentCountIsFullError,
    ClinicError,
    NotFoundError,
    StoreConflictError,
    ValidationError,
)
from clinic.schemas.dtos import ErrorResponse

logger = logging.getLogger(__name__)


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def status_for_error(error: ClinicError) -> int:
    """Map a domain error to the HTTP status code the API reports."""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(
        error, (AlreadyExistError, AppointmentCountIsFullError, StoreConflictError)
    ):
        return 409
    return 400


def error_response(error: ClinicError) -> tuple:
    """Render a domain error with the standard envelope."""
    payload = ErrorResponse.from_exception(error)
    data = {"error": payload.error}
    if payload.field:
        data["field"] = payload.field
    return api_response(False, payload.message, data, status_for_error(error))


def get_json_body() -> dict:
    """Return the request JSON object or raise ValidationError."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def parse_iso_datetime(value: Any, field: str = "date") -> datetime:
    """Parse an ISO-8601 date or datetime string from a request body."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    try:
        text = value.strip()
        # fromisoformat only accepts a trailing Z from Python 3.11
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(
            f"{field} must be an ISO-8601 date or datetime", field=field
        ) from e


def internal_error_response(action: str, error: Exception) -> tuple:
    """Log an unexpected failure and answer with the 500 envelope."""
    logger.error(
        f"Failed to {action}",
        extra={"context": {"error": str(error)}},
        exc_info=True,
    )
    return api_response(False, "Internal server error", None, 500)
