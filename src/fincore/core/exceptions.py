"""
Fincore exception hierarchy.

All fincore exceptions inherit from FincoreError, making it easy for consumers
(web handlers, report jobs) to catch engine-level errors and map them to
user-facing messages or HTTP statuses.
"""


class FincoreError(Exception):
    """Base exception class for all fincore errors."""


class InvalidInputError(FincoreError, ValueError):
    """Raised when a calculation receives malformed input.

    Negative income, ``retirement_age <= current_age``, non-positive loan terms
    and similar caller bugs. Never retryable; nothing is partially computed.
    """


class ConfigurationError(FincoreError):
    """Raised for configuration errors (unreadable file, invalid values)."""
