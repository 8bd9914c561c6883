"""
Operation record passed to the link.

One Operation is created per request; the link reads it and writes the raw
transport response back into its context under the ``response`` key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

ContextUpdate = Union[dict[str, Any], Callable[[dict[str, Any]], dict[str, Any]]]


@dataclass
class Operation:
    """
    A single logical request.

    Attributes:
        query: Query document (a string, or any object ``print_query`` can render)
        variables: Variable values keyed by name
        operation_name: Name of the operation to run, if the document has several
        extensions: Protocol extensions sent when ``include_extensions`` is on
    """
    query: Any
    variables: Optional[dict[str, Any]] = field(default_factory=dict)
    operation_name: Optional[str] = None
    extensions: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict, repr=False)

    def get_context(self) -> dict[str, Any]:
        """Return a shallow copy of the context."""
        return dict(self.context)

    def set_context(self, update: ContextUpdate) -> dict[str, Any]:
        """
        Merge keys into the context.

        Args:
            update: Mapping of keys to set, or a function receiving the current
                context and returning such a mapping

        Returns:
            The updated context
        """
        if callable(update):
            update = update(self.get_context())
        self.context = {**self.context, **update}
        return self.context
