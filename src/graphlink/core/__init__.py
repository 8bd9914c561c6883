"""
Core module - operation, result stream, configuration and errors.
"""

from __future__ import annotations

from .config import (
    FALLBACK_CONFIG,
    HttpConfig,
    HttpSettings,
    RequestDescriptor,
    default_print_query,
    select_options_and_body,
)
from .errors import (
    AbortError,
    ConstructionError,
    RequestConfigError,
    GraphLinkError,
    ResponseError,
    SerializationError,
    ServerParseError,
    TransportError,
)
from .observable import Observable, Observer, Subscription, SubscriptionObserver
from .operation import Operation
from .settings import LinkSettings, load_settings

__all__ = [
    # Configuration
    "FALLBACK_CONFIG",
    "HttpConfig",
    "HttpSettings",
    "RequestDescriptor",
    "default_print_query",
    "select_options_and_body",
    "LinkSettings",
    "load_settings",
    # Errors
    "GraphLinkError",
    "ConstructionError",
    "RequestConfigError",
    "SerializationError",
    "TransportError",
    "ResponseError",
    "ServerParseError",
    "AbortError",
    # Stream
    "Observable",
    "Observer",
    "Subscription",
    "SubscriptionObserver",
    # Operation
    "Operation",
]
