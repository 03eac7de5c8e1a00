"""Domain exceptions for the dealer inventory service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DealerInventoryException(Exception):
    """Base exception for all dealer inventory errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DealerInventoryException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidQueryException(DealerInventoryException):
    """Raised when list-query parameters are malformed or not allowed.

    Covers bad sort syntax and sorting by a field outside the whitelist.
    Client error; never retried.
    """

    def __init__(self, reason: str, parameter: str = "sort", value: str | None = None) -> None:
        """Initialize with a short reason and the offending parameter.

        Args:
            reason: Short machine-friendly reason (e.g. 'bad format').
            parameter: Query parameter that failed (default 'sort').
            value: Optional raw value supplied by the caller.
        """
        details: dict[str, Any] = {"parameter": parameter, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Invalid query: {reason}", "INVALID_QUERY", details)
        self.reason = reason


class AuthenticationException(DealerInventoryException):
    """Raised when the bearer token is missing, invalid, or lacks the tenant claim."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(DealerInventoryException):
    """Raised when a requested resource is not found.

    Also raised when the resource exists under another tenant: callers
    cannot tell the two apart.
    """

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'vehicle', 'sale_record').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ConflictException(DealerInventoryException):
    """Raised when a write would break a uniqueness or exclusivity rule."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "CONFLICT", details)


class VehicleAlreadySoldException(ConflictException):
    """Raised when a vehicle already has a SOLD sale record (one SOLD record per vehicle)."""

    def __init__(self, vehicle_id: int, existing_record_id: int | None = None) -> None:
        """Initialize with the vehicle and, when known, the record already holding SOLD.

        Args:
            vehicle_id: Vehicle being sold.
            existing_record_id: Sale record that already holds SOLD (None when
                detected by the store constraint).
        """
        details: dict[str, Any] = {"vehicle_id": vehicle_id}
        if existing_record_id is not None:
            details["existing_sale_record_id"] = existing_record_id
        super().__init__("item already sold via another record", **details)


class DuplicateVinException(ConflictException):
    """Raised when a VIN already exists in the dealership inventory (soft-deleted rows included)."""

    def __init__(self, vin: str) -> None:
        super().__init__("VIN number already exists in your inventory", vin=vin)
