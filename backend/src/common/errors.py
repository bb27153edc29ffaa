"""Exception hierarchy shared by the ambient alert handlers."""

from __future__ import annotations


class AmbientAlertsError(Exception):
    """Base exception for all ambient alert errors."""


class ConfigurationError(AmbientAlertsError):
    """Missing or invalid configuration or credentials."""


class StoreError(AmbientAlertsError):
    """DynamoDB read or write failure."""

    def __init__(self, message: str, *, table: str = "") -> None:
        self.table = table
        super().__init__(message)


class CorruptStateError(StoreError):
    """Persisted item does not match the expected shape."""


class StaleWriteError(StoreError):
    """Item changed between read and conditional write."""


class DeliveryError(AmbientAlertsError):
    """Push service rejected the multicast call."""
