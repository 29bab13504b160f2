"""
Service Exceptions
Error taxonomy for the service layer and its HTTP mapping
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """
    Base class for every error a service raises on purpose

    Attributes:
        message: Human readable message, returned to the client as "error"
        code: Stable machine readable code
        details: Extra context for logs and debugging
    """

    code = "service_error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(ServiceError):
    """Missing or malformed identifier or payload"""

    code = "validation_error"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
        self.field = field


# ============================================================================
# Auth Errors
# ============================================================================


class AuthenticationError(ServiceError):
    """No credential, or a credential that matches no live session"""

    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


# ============================================================================
# Resource Errors
# ============================================================================


class ResourceNotFoundError(ServiceError):
    """Target entity does not exist"""

    code = "not_found"

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        super().__init__(
            f"{resource_type} not found",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceConflictError(ServiceError):
    """Action conflicts with current state (duplicate or self subscription)"""

    code = "conflict"


# ============================================================================
# Database Errors
# ============================================================================


class DatabaseError(ServiceError):
    """Underlying store failed or is unavailable"""

    code = "database_error"

    def __init__(self, message: str = "Database error", operation: Optional[str] = None):
        super().__init__(message, details={"operation": operation})
        self.operation = operation


# ============================================================================
# Utility Functions
# ============================================================================

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (ResourceNotFoundError, 404),
    # Duplicate and self subscription report 400, same as validation
    (ResourceConflictError, 400),
    (DatabaseError, 500),
)


def error_to_http_status(error: ServiceError) -> int:
    """Map a service error to its HTTP status code"""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return 500
