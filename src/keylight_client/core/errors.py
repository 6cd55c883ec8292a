from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Discriminant shared by every Key Light error."""

    CONNECTION_FAILURE = "connection_failure"
    REJECTED_REQUEST = "rejected_request"
    RANGE_VALIDATION = "range_validation"


class KeyLightError(Exception):
    """Base class for all Key Light errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class KeyLightConnectionError(KeyLightError):
    """The device could not be reached or its reply could not be read."""

    kind = ErrorKind.CONNECTION_FAILURE

    def __init__(self, address: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Failed to connect to Key Light at {address}")
        self.address = address
        self.cause = cause


class KeyLightRequestRejected(KeyLightError):
    """The device answered with a client-error status."""

    kind = ErrorKind.REJECTED_REQUEST

    def __init__(
        self,
        endpoint: str,
        details: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        message = f"Bad request to {endpoint}"
        if details:
            message = f"{message}: {details}"
        super().__init__(message)
        self.endpoint = endpoint
        self.details = details
        self.status = status


class KeyLightValidationError(KeyLightError):
    """A caller-supplied value is outside the accepted range for a field."""

    kind = ErrorKind.RANGE_VALIDATION

    def __init__(self, field: str, value: float, minimum: float, maximum: float) -> None:
        super().__init__(f"{field} must be between {minimum} and {maximum}, got {value}")
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


def check_range(field: str, value: float, minimum: float, maximum: float) -> None:
    """Raise KeyLightValidationError unless minimum <= value <= maximum."""
    if not minimum <= value <= maximum:
        raise KeyLightValidationError(field, value, minimum, maximum)
