from __future__ import annotations

import asyncio
import inspect
from typing import Any, Optional

import httpx

from graphlink import AbortError


def make_response(status_code: int = 200, json: Any = None, text: Optional[str] = None) -> httpx.Response:
    if text is not None:
        return httpx.Response(status_code, text=text)
    return httpx.Response(status_code, json=json)


class StubFetcher:
    """Fetcher returning (or raising) a canned outcome and recording calls."""

    def __init__(self, outcome: Any, supports_abort: bool = False):
        self.outcome = outcome
        self.supports_abort = supports_abort
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, options: dict[str, Any]) -> Any:
        self.calls.append((url, options))
        outcome = self.outcome
        if callable(outcome) and not isinstance(outcome, BaseException):
            outcome = outcome(url, options)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class PendingFetcher:
    """Fetcher that stays in flight until released or aborted."""

    def __init__(self, supports_abort: bool = True):
        self.supports_abort = supports_abort
        self.started = asyncio.Event()
        self.abort_calls = 0
        self.future: Optional[asyncio.Future] = None
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, options: dict[str, Any]) -> Any:
        self.calls.append((url, options))
        self.future = asyncio.get_running_loop().create_future()
        signal = options.get("signal")
        if signal is not None:
            signal.add_listener(self._on_abort)
        self.started.set()
        return await self.future

    def _on_abort(self) -> None:
        self.abort_calls += 1
        if self.future is not None and not self.future.done():
            self.future.set_exception(AbortError())

    def release(self, response: Any) -> None:
        assert self.future is not None
        self.future.set_result(response)


class Recorder:
    """Observer collecting deliveries as (kind, payload) tuples."""

    def __init__(self):
        self.events: list[tuple[str, Any]] = []

    def next(self, value: Any) -> None:
        self.events.append(("next", value))

    def error(self, err: BaseException) -> None:
        self.events.append(("error", err))

    def complete(self) -> None:
        self.events.append(("complete", None))

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]

    def subscribe_to(self, observable):
        return observable.subscribe(next=self.next, error=self.error, complete=self.complete)


async def settle(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


