# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# Policy for server-side failures (status >= 500): the provider or internal
# message is forwarded outside production and replaced by a generic message
# in production.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred"


class BettaRegistryException(Exception):
    """
    Base exception for the BettaRegistry API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BETTAREGISTRY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


class ValidationFailedError(BettaRegistryException):
    """Raised when a request passes schema validation but breaks a domain rule."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field} if field else None,
        )


# =============================================================================
# Inventory / Order Exceptions
# =============================================================================

class FishNotFoundError(BettaRegistryException):
    """Raised when a fish ID doesn't exist."""

    def __init__(self, fish_id: str):
        super().__init__(
            message=f"Fish not found: {fish_id}",
            code="FISH_NOT_FOUND",
            status_code=404,
            suggestion="Check the certificate ID printed on the fish card",
            details={"fish_id": fish_id}
        )


class FishAlreadyExistsError(BettaRegistryException):
    """Raised when creating a fish with an ID that is already registered."""

    def __init__(self, fish_id: str):
        super().__init__(
            message=f"Fish already registered: {fish_id}",
            code="FISH_EXISTS",
            status_code=409,
            suggestion="Use PUT /api/fish/{id} to edit an existing fish, or omit the ID to generate one",
            details={"fish_id": fish_id}
        )


class FishUnavailableError(BettaRegistryException):
    """Raised when ordering a fish that has already been sold."""

    def __init__(self, fish_id: str, status: str):
        super().__init__(
            message=f"Fish is not available for sale: {fish_id}",
            code="FISH_UNAVAILABLE",
            status_code=409,
            suggestion="Delete the order that sold this fish before selling it again",
            details={"fish_id": fish_id, "status": status}
        )


class OrderNotFoundError(BettaRegistryException):
    """Raised when an order ID doesn't exist."""

    def __init__(self, order_id: str):
        super().__init__(
            message=f"Order not found: {order_id}",
            code="ORDER_NOT_FOUND",
            status_code=404,
            details={"order_id": order_id}
        )


class InvalidTransitionError(BettaRegistryException):
    """Raised when a status change is not permitted by the workflow."""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            message=f"Cannot change {entity} status from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
            status_code=409,
            details={"entity": entity, "current": current, "target": target}
        )


# =============================================================================
# Contest / Judging Exceptions
# =============================================================================

class RegistrationNotFoundError(BettaRegistryException):
    """Raised when a contest registration doesn't exist (or isn't the caller's)."""

    def __init__(self, registration_id: str):
        super().__init__(
            message=f"Registration not found: {registration_id}",
            code="REGISTRATION_NOT_FOUND",
            status_code=404,
            details={"registration_id": registration_id}
        )


class JudgeNotAssignedError(BettaRegistryException):
    """Raised when a judge scores an entry of an event they are not assigned to."""

    def __init__(self, contest_name: str):
        super().__init__(
            message=f"You are not assigned to judge '{contest_name}'",
            code="JUDGE_NOT_ASSIGNED",
            status_code=403,
            suggestion="Ask the admin to assign you to this event",
            details={"contest_name": contest_name}
        )


class SpinNotAllowedError(BettaRegistryException):
    """Raised when a registration is not eligible for the prize spin."""

    def __init__(self, registration_id: str, reason: str, status_code: int = 400):
        super().__init__(
            message=f"Spin not allowed: {reason}",
            code="SPIN_NOT_ALLOWED",
            status_code=status_code,
            details={"registration_id": registration_id}
        )


class PrizeAlreadyRedeemedError(BettaRegistryException):
    """Raised when a prize is redeemed a second time."""

    def __init__(self, registration_id: str):
        super().__init__(
            message="Prize has already been redeemed",
            code="PRIZE_ALREADY_REDEEMED",
            status_code=409,
            details={"registration_id": registration_id}
        )


class EventNotFoundError(BettaRegistryException):
    """Raised when an event ID doesn't exist."""

    def __init__(self, event_id: str):
        super().__init__(
            message=f"Event not found: {event_id}",
            code="EVENT_NOT_FOUND",
            status_code=404,
            details={"event_id": event_id}
        )


class JudgeNotFoundError(BettaRegistryException):
    """Raised when a judge ID doesn't exist."""

    def __init__(self, judge_id: str):
        super().__init__(
            message=f"Judge not found: {judge_id}",
            code="JUDGE_NOT_FOUND",
            status_code=404,
            details={"judge_id": judge_id}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(BettaRegistryException):
    """Raised for missing, malformed or expired credentials."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            message=message,
            code="NOT_AUTHENTICATED",
            status_code=401,
            suggestion="Log in again and send the token as 'Authorization: Bearer <token>'",
        )


class PermissionDeniedError(BettaRegistryException):
    """Raised when an authenticated caller has the wrong role."""

    def __init__(self, required: str):
        super().__init__(
            message=f"This action requires the '{required}' role",
            code="FORBIDDEN",
            status_code=403,
            details={"required_role": required}
        )


class UsernameTakenError(BettaRegistryException):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            message=f"Username already taken: {username}",
            code="USERNAME_TAKEN",
            status_code=409,
            suggestion="Pick a different username",
            details={"username": username}
        )


# =============================================================================
# Upload / Upstream Exceptions
# =============================================================================

class InvalidFileTypeError(BettaRegistryException):
    """Raised when uploaded media has the wrong content type."""

    def __init__(self, filename: str, expected: str):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Upload a file of type {expected}",
            details={"filename": filename, "expected": expected}
        )


class FileTooLargeError(BettaRegistryException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(BettaRegistryException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


class UpstreamServiceError(BettaRegistryException):
    """Raised when a third-party provider (payment, shipping, AI) fails."""

    def __init__(self, provider: str, error: str):
        super().__init__(
            message=f"{provider} request failed: {error}",
            code="UPSTREAM_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"provider": provider, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def bettaregistry_exception_handler(
    request: Request,
    exc: BettaRegistryException
) -> JSONResponse:
    """
    Convert BettaRegistryException to JSON response.

    Server-side failures are masked in production.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        if settings.is_production:
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": GENERIC_SERVER_ERROR, "code": exc.code},
            )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Missing or invalid fields are reported as 400 with the offending locations.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking a stack trace."""
    logger.exception(f"Unexpected error: {exc}")
    detail = GENERIC_SERVER_ERROR if settings.is_production else f"{GENERIC_SERVER_ERROR}: {exc}"
    return JSONResponse(
        status_code=500,
        content={
            "detail": detail,
            "code": "INTERNAL_ERROR",
        }
    )
