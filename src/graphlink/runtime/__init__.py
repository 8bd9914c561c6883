"""
Runtime module - request pipeline steps used by the link.
"""

from __future__ import annotations

from .body import serialize_body
from .cancellation import (
    AbortController,
    AbortSignal,
    CancellationHandle,
    create_signal_if_supported,
    supports_abort,
)
from .fetch import Fetcher, HttpxFetcher, check_fetcher
from .response import parse_and_check_response
from .uri import DEFAULT_URI, select_uri

__all__ = [
    "select_uri",
    "DEFAULT_URI",
    "serialize_body",
    "AbortController",
    "AbortSignal",
    "CancellationHandle",
    "create_signal_if_supported",
    "supports_abort",
    "Fetcher",
    "HttpxFetcher",
    "check_fetcher",
    "parse_and_check_response",
]
