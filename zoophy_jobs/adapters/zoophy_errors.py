"""Project-native typed exceptions for ZooPhy API adapter failures."""

from __future__ import annotations


class ZoophyAdapterError(Exception):
    """Base exception for adapter-level ZooPhy API failures.

    Attributes:
        status_code: Optional upstream HTTP status code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ZoophyAdapterConnectionError(ZoophyAdapterError, ConnectionError):
    """Transport-level connectivity failure during ZooPhy API communication."""


class ZoophyAdapterTimeoutError(ZoophyAdapterError, TimeoutError):
    """Transport timeout while waiting for a ZooPhy API response."""


class ZoophyResponseError(ZoophyAdapterError, ValueError):
    """Response body does not follow the expected ZooPhy API contract."""
