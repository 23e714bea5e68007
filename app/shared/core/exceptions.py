# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the marketplace uses to say what went wrong
# (order too small, not your order, restaurant missing) in a clear, organized way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error codes, details and serialization for the uniform JSON error envelope.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# All domain services, repositories, middleware, app.main exception handlers

from typing import Any, Dict, List, Optional

from fastapi import status


class MarketplaceException(Exception):
    """
    Base exception class for the food delivery marketplace.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(MarketplaceException):
    """
    Exception raised for authentication failures.
    Used when the bearer token or credentials are invalid or missing.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(MarketplaceException):
    """
    Exception raised for authorization failures.
    Used when the caller is authenticated but not entitled to the resource.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_role: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_role:
            details["required_role"] = required_role

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="FORBIDDEN"
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(MarketplaceException):
    """
    Exception raised for malformed or missing input.
    Carries either a single offending field or a list of per-field errors.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if errors:
            details["errors"] = errors

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(MarketplaceException):
    """
    Exception raised when requested resource is not found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(MarketplaceException):
    """
    Exception raised when attempting to create duplicate resources.
    Used for duplicate registrations and one-per-user profiles.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


# =============================================================================
# BUSINESS LOGIC EXCEPTIONS
# =============================================================================

class InvalidStateError(MarketplaceException):
    """
    Exception raised when an operation violates a business rule
    for the current state of an entity.

    Examples: order below the restaurant minimum, rating before delivery,
    an illegal status transition.
    """

    def __init__(
        self,
        message: str = "Operation not allowed in the current state",
        rule: Optional[str] = None,
        current_state: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if rule:
            details["rule"] = rule
        if current_state:
            details["current_state"] = current_state

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_STATE"
        )


class ConcurrencyConflictError(MarketplaceException):
    """
    Exception raised when an optimistic version check fails because
    another request modified the same record first.
    """

    def __init__(
        self,
        message: str = "The resource was modified by another request, please retry",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONFLICT"
        )


# =============================================================================
# PAYMENT & EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class PaymentSignatureError(MarketplaceException):
    """Exception raised when a gateway signature does not match."""

    def __init__(
        self,
        message: str = "Invalid payment signature",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="INVALID_SIGNATURE"
        )


class ExternalServiceError(MarketplaceException):
    """
    Exception raised when external service calls fail.
    Used for the payment gateway.
    """

    def __init__(
        self,
        message: str = "External service error",
        service_name: Optional[str] = None,
        service_status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if service_name:
            details["service_name"] = service_name
        if service_status_code:
            details["service_status_code"] = service_status_code

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


# =============================================================================
# DATABASE EXCEPTIONS
# =============================================================================

class DatabaseError(MarketplaceException):
    """
    Exception raised for unexpected database failures.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )
