"""
Request body encoding.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ..core.errors import SerializationError

BODY_KEYS = ("operationName", "variables", "query", "extensions")


def serialize_body(body: Mapping[str, Any]) -> str:
    """
    Validate and JSON-encode a body record.

    Only ``BODY_KEYS`` are emitted; keys holding None are dropped. A body
    without query text is accepted only when it carries extensions
    (persisted queries).

    Raises:
        SerializationError: If variables are not a mapping of names, the query
            is missing, or a value cannot be encoded
    """
    variables = body.get("variables")
    if variables is not None:
        if not isinstance(variables, Mapping):
            raise SerializationError("Variables", f"expected a mapping, got {type(variables).__name__}")
        bad_keys = [key for key in variables if not isinstance(key, str)]
        if bad_keys:
            raise SerializationError("Variables", f"names must be strings, got {bad_keys!r}")

    if body.get("query") is None and not body.get("extensions"):
        raise SerializationError("Payload", "query is missing")

    payload = {key: body[key] for key in BODY_KEYS if body.get(key) is not None}
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise SerializationError("Payload", str(e)) from e
