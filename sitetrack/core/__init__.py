"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from sitetrack.core.exceptions import (
    ApplicationException,
    DomainException,
    ValidationError,
    UnknownFieldError,
    InvalidStateError,
    ConfigurationException,
)

__all__ = [
    "ApplicationException",
    "DomainException",
    "ValidationError",
    "UnknownFieldError",
    "InvalidStateError",
    "ConfigurationException",
]
