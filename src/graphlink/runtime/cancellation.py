"""
Cooperative cancellation of in-flight requests.

A fetcher advertises abort support with a truthy ``supports_abort``
attribute. For such fetchers the link creates one AbortController per
request and passes its signal in the fetch options under ``signal``.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Optional


class AbortSignal:
    """Read side of an AbortController."""

    def __init__(self):
        self._aborted = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def aborted(self) -> bool:
        return self._aborted

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Run callback on abort, immediately if already aborted."""
        if self._aborted:
            callback()
        else:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _abort(self) -> None:
        if self._aborted:
            return
        self._aborted = True
        listeners, self._listeners = self._listeners, []
        for callback in listeners:
            callback()


class AbortController:
    """Owner of an AbortSignal. ``abort()`` is idempotent."""

    def __init__(self):
        self.signal = AbortSignal()

    def abort(self) -> None:
        self.signal._abort()


class CancellationHandle(NamedTuple):
    controller: Optional[AbortController]
    signal: Optional[AbortSignal]


def supports_abort(fetcher: Any) -> bool:
    """Check whether a fetcher honours the ``signal`` fetch option."""
    return bool(getattr(fetcher, "supports_abort", False))


def create_signal_if_supported(supported: bool) -> CancellationHandle:
    if not supported:
        return CancellationHandle(None, None)
    controller = AbortController()
    return CancellationHandle(controller, controller.signal)
