"""
graphlink - asyncio HTTP transport for GraphQL operations.

Sends one Operation as one HTTP request and delivers the decoded result
through a cancellable single-subscriber stream.

Usage:
    from graphlink import HttpLink, Operation

    link = HttpLink("https://api.example.com/graphql")
    result = await link.execute(Operation(query="{ viewer { id } }"))
"""

from __future__ import annotations

from .core import (
    FALLBACK_CONFIG,
    AbortError,
    ConstructionError,
    RequestConfigError,
    GraphLinkError,
    HttpConfig,
    HttpSettings,
    LinkSettings,
    Observable,
    Observer,
    Operation,
    RequestDescriptor,
    ResponseError,
    SerializationError,
    ServerParseError,
    Subscription,
    TransportError,
    select_options_and_body,
)
from .link import HttpLink, RequestHandler, create_http_link
from .runtime import (
    AbortController,
    AbortSignal,
    HttpxFetcher,
    parse_and_check_response,
    select_uri,
    serialize_body,
)

__version__ = "0.1.0"

__all__ = [
    # Link
    "HttpLink",
    "RequestHandler",
    "create_http_link",
    # Operation and stream
    "Operation",
    "Observable",
    "Observer",
    "Subscription",
    # Configuration
    "FALLBACK_CONFIG",
    "HttpConfig",
    "HttpSettings",
    "LinkSettings",
    "RequestDescriptor",
    "select_options_and_body",
    # Pipeline steps
    "select_uri",
    "serialize_body",
    "parse_and_check_response",
    "AbortController",
    "AbortSignal",
    "HttpxFetcher",
    # Errors
    "GraphLinkError",
    "ConstructionError",
    "RequestConfigError",
    "SerializationError",
    "TransportError",
    "ResponseError",
    "ServerParseError",
    "AbortError",
]
