"""
Configuration layers and the resolver that merges them.

Three layers take part in every request, lowest precedence first:

1. fallback - library defaults (FALLBACK_CONFIG)
2. link config - fixed when the link is created
3. context config - read from the Operation context on every request

Scalar fields are taken from the highest layer that defines them; None never
overrides. Mapping fields (headers, fetch options) are merged key by key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .operation import Operation

QueryPrinter = Callable[[Any], Optional[str]]

# Context keys read as configuration overrides
CONTEXT_CONFIG_KEYS = ("http", "fetch_options", "fetchOptions", "credentials", "headers")


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class HttpSettings(_ConfigModel):
    """Body shaping flags (``http`` key)."""
    include_query: Optional[bool] = None
    include_extensions: Optional[bool] = None


class HttpConfig(_ConfigModel):
    """
    One configuration layer.

    Example:
        HttpConfig(
            http={"include_extensions": True},
            headers={"authorization": "Bearer token"},
            fetch_options={"timeout": 5.0},
        )
    """
    http: Optional[HttpSettings] = None
    fetch_options: Optional[dict[str, Any]] = None
    credentials: Optional[str] = None
    headers: Optional[dict[str, str]] = None

    @classmethod
    def from_context(cls, context: Mapping[str, Any]) -> "HttpConfig":
        """Build the per-request override layer from an Operation context."""
        values = {key: context[key] for key in CONTEXT_CONFIG_KEYS if key in context}
        # snake_case fetch_options wins over the camelCase alias
        if "fetchOptions" in values:
            camel = values.pop("fetchOptions")
            if "fetch_options" not in values:
                values["fetch_options"] = camel
        return cls.model_validate(values)


FALLBACK_CONFIG = HttpConfig(
    http=HttpSettings(include_query=True, include_extensions=False),
    headers={
        "accept": "*/*",
        "content-type": "application/json",
    },
    fetch_options={"method": "POST"},
)


@dataclass
class RequestDescriptor:
    """Resolved fetch options and body record for a single request."""
    options: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


def default_print_query(query: Any) -> Optional[str]:
    """Render a query document as text."""
    if query is None or isinstance(query, str):
        return query
    return str(query)


def _merge_layer(options: dict[str, Any], http: dict[str, Any], config: HttpConfig) -> dict[str, Any]:
    fetch_options = dict(config.fetch_options or {})
    headers = {
        **options.get("headers", {}),
        **(fetch_options.pop("headers", None) or {}),
        **(config.headers or {}),
    }
    options = {**options, **fetch_options, "headers": headers}
    if config.credentials is not None:
        options["credentials"] = config.credentials
    if config.http is not None:
        http.update(config.http.model_dump(exclude_none=True))
    return options


def select_options_and_body(
    operation: Operation,
    fallback: HttpConfig,
    *configs: Optional[HttpConfig],
    print_query: QueryPrinter = default_print_query,
) -> RequestDescriptor:
    """
    Merge configuration layers and derive the request body.

    Args:
        operation: Operation being sent
        fallback: Lowest precedence layer
        configs: Further layers in increasing precedence; None entries are skipped
        print_query: Renders ``operation.query`` as text

    Returns:
        RequestDescriptor with fresh ``options`` and ``body`` dicts
    """
    http: dict[str, Any] = {}
    options: dict[str, Any] = {"headers": {}}
    for config in (fallback, *configs):
        if config is not None:
            options = _merge_layer(options, http, config)
    options.setdefault("method", "POST")

    body: dict[str, Any] = {}
    if operation.operation_name is not None:
        body["operationName"] = operation.operation_name
    if operation.variables is not None:
        variables = operation.variables
        body["variables"] = dict(variables) if isinstance(variables, Mapping) else variables
    if http.get("include_extensions") and operation.extensions:
        body["extensions"] = dict(operation.extensions)
    if http.get("include_query", True):
        body["query"] = print_query(operation.query)

    return RequestDescriptor(options=options, body=body)
