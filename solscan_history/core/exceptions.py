"""
Application-level exceptions.

Raised at the API client seam (HttpError, NetworkError, ResponseError) or at
controller entry (ValidationError); propagated unchanged to the controller,
which records the message on the fetch state. Nothing here is retried.
"""

from __future__ import annotations


class SolscanHistoryError(Exception):
    """Base class for every error this package raises."""

    code = "solscan_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SolscanHistoryError):
    """Missing or malformed input, detected before any network call."""

    code = "validation_error"


class HttpError(SolscanHistoryError):
    """The API answered with a non-success status."""

    code = "http_error"

    def __init__(self, status: int, endpoint: str = "Request") -> None:
        super().__init__(f"{endpoint} error ({status})")
        self.status = status
        self.endpoint = endpoint


class NetworkError(SolscanHistoryError):
    """Transport-level failure: DNS, connection refused, timeout."""

    code = "network_error"


class ResponseError(SolscanHistoryError):
    """The API answered with a body that is not valid JSON."""

    code = "response_error"
