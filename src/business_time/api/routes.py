"""
Flask API Routes.

Defines all HTTP endpoints for the business-time service.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, request
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from business_time import __version__
from business_time.api.rate_limiting import rate_limit
from business_time.api.validation import BusinessDateQuery
from business_time.core.exceptions import BusinessError
from business_time.infrastructure.logging import get_logger
from business_time.infrastructure.metrics import get_metrics, metrics_endpoint
from business_time.services import BusinessDateCalculator


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)


def _error_response(
    message: str,
    status_code: int,
    error_type: str = "invalid_request",
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    return {
        "error": error_type,
        "message": message,
    }, status_code


def _validation_message(error: PydanticValidationError) -> str:
    """First validation failure, without pydantic's prefix."""
    first = error.errors()[0]
    cause = first.get("ctx", {}).get("error")
    return str(cause) if cause else first["msg"]


def format_utc(instant: datetime) -> str:
    """UTC ISO 8601 with second precision and a Z marker."""
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """
    Health check endpoint for container probes.

    Returns:
        Health status response.
    """
    return {
        "status": "healthy",
        "service": "business-time",
        "version": __version__,
    }, 200


@api_bp.route("/", methods=["GET"])
def index():
    """Demo page for the calculator."""
    return current_app.send_static_file("index.html")


@api_bp.route("/metrics", methods=["GET"])
def metrics():
    """
    Prometheus metrics endpoint.
    """
    return metrics_endpoint()


# ============================================================================
# Business Date Endpoint
# ============================================================================

@api_bp.route("/business-days", methods=["GET"])
@rate_limit
def business_days() -> Tuple[Dict[str, Any], int]:
    """
    Add business days and/or hours to a start date.

    Query Parameters:
        days (int): Business days to add.
        hours (int): Business hours to add.
        date (str): Optional UTC start, ISO 8601 ending with Z. Defaults to now.

    Returns:
        The resulting date in UTC.
    """
    try:
        query = BusinessDateQuery.model_validate(request.args.to_dict())
    except PydanticValidationError as e:
        get_metrics().calculations_total.inc(status="invalid")
        return _error_response(_validation_message(e), 400)

    calculator = BusinessDateCalculator()
    result = calculator.calculate(
        query.start,
        query.days or 0,
        query.hours or 0,
    )

    get_metrics().calculations_total.inc(status="success")

    return {"date": format_utc(result)}, 200


# ============================================================================
# Error Handlers
# ============================================================================

@api_bp.errorhandler(BusinessError)
def handle_business_error(error: BusinessError) -> Tuple[Dict[str, Any], int]:
    """Handle business logic errors (4xx)."""
    logger.warning(
        f"Business error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    return _error_response(str(error), 400)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception):
    """Handle unexpected errors (500)."""
    if isinstance(error, HTTPException):
        return error

    logger.exception(
        f"Unexpected error: {error}",
        extra={"extra_fields": {"error_type": type(error).__name__}}
    )
    if request.endpoint == "api.business_days":
        get_metrics().calculations_total.inc(status="error")
    return _error_response(
        str(error) or "Unknown error",
        500,
        "internal_error",
    )
