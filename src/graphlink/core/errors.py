"""
Custom exceptions for the graphlink HTTP transport.
"""

from __future__ import annotations

from typing import Any, Optional


class GraphLinkError(Exception):
    """Base exception for all graphlink errors."""
    pass


class ConstructionError(GraphLinkError):
    """Raised when a link is built with an unusable fetch or invalid configuration."""
    pass


class RequestConfigError(GraphLinkError):
    """Raised when per-request configuration or URI selection fails."""

    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"{message}: {cause}")
        self.__cause__ = cause


class SerializationError(GraphLinkError):
    """Raised when the request body cannot be encoded."""

    def __init__(self, label: str, message: str):
        self.label = label
        super().__init__(f"Network request failed. {label} is not serializable: {message}")


class TransportError(GraphLinkError):
    """Raised when the underlying fetch fails for a reason other than abort."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Network request failed: {cause}")
        self.__cause__ = cause


class ResponseError(GraphLinkError):
    """Raised when a response has a non-success status or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int,
        result: Any = None,
        body_text: Optional[str] = None,
        response: Any = None,
    ):
        self.status_code = status_code
        self.result = result
        self.body_text = body_text
        self.response = response
        super().__init__(message)


class ServerParseError(ResponseError):
    """Raised when a response body is not valid JSON."""
    pass


class AbortError(GraphLinkError):
    """Raised by a fetcher when its request was aborted through the signal."""

    def __init__(self, message: str = "The operation was aborted"):
        super().__init__(message)
