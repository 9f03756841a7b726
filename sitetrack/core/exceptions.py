"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

Every engine refuses an invalid mutation by raising one of these; none of
them is fatal and the snapshot passed in is never modified.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ValidationError(ApplicationException):
    """Missing or invalid input, e.g. an unknown origin or blank text."""


class UnknownFieldError(ValidationError):
    """Exception when a stage sub-item name is not recognized."""

    def __init__(self, field_name: str, details: Optional[dict] = None):
        self.field_name = field_name
        super().__init__(
            f"Unknown stage sub-item '{field_name}'",
            details or {"field_name": field_name}
        )


class InvalidStateError(DomainException):
    """Operation not allowed in the record's current lifecycle state."""

    def __init__(
        self,
        operation: str,
        current_state: str,
        details: Optional[dict] = None
    ):
        self.operation = operation
        self.current_state = current_state
        super().__init__(
            f"Cannot {operation} while in state {current_state}",
            details or {"operation": operation, "current_state": current_state}
        )


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""
