"""
Response translation - turns a transport response into a result dict.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.errors import ResponseError, ServerParseError
from ..core.operation import Operation


def parse_and_check_response(operation: Operation, response: Any) -> dict[str, Any]:
    """
    Decode and validate a response.

    Args:
        operation: Operation the response belongs to
        response: Object exposing ``status_code`` and ``text``

    Returns:
        Decoded result with ``data`` and/or ``errors``

    Raises:
        ResponseError: If the status is not 2xx, or the body has neither
            ``data`` nor ``errors``. Carries the decoded body when available.
        ServerParseError: If a 2xx body is not valid JSON
    """
    status_code = response.status_code
    body_text = response.text

    parse_error = None
    try:
        result = json.loads(body_text)
    except ValueError as e:
        result = None
        parse_error = e

    if status_code >= 300:
        raise ResponseError(
            f"Response not successful: Received status code {status_code}",
            status_code=status_code,
            result=result,
            body_text=body_text,
            response=response,
        )

    if parse_error is not None:
        raise ServerParseError(
            f"Response could not be parsed: {parse_error}",
            status_code=status_code,
            body_text=body_text,
            response=response,
        ) from parse_error

    if not isinstance(result, dict) or ("data" not in result and "errors" not in result):
        raise ResponseError(
            f"Server response was missing for query '{operation.operation_name}'.",
            status_code=status_code,
            result=result,
            body_text=body_text,
            response=response,
        )

    return result
