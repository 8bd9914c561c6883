"""
URI selection for a single request.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from ..core.operation import Operation

DEFAULT_URI = "/graphql"

UriFunction = Callable[[Operation], str]


def select_uri(operation: Operation, fallback_uri: Optional[Union[str, UriFunction]] = None) -> str:
    """
    Pick the URI to send an operation to.

    A ``uri`` key in the operation context wins; otherwise a callable
    ``fallback_uri`` is invoked with the operation, and a string is used as is.
    """
    context_uri = operation.get_context().get("uri")
    if context_uri:
        return context_uri
    if callable(fallback_uri):
        return fallback_uri(operation)
    return fallback_uri or DEFAULT_URI
