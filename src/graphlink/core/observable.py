"""
Single-subscriber result stream.

An Observable wraps a subscriber function. Subscribing runs it with a
SubscriptionObserver sink; the function may return a teardown callback that
runs once, either after a terminal delivery or on unsubscribe.

Delivery rules:
- after ``error`` or ``complete`` the stream is closed
- after ``unsubscribe`` every delivery is a silent no-op
- an exception raised by the subscriber function is delivered as ``error``
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Teardown = Optional[Callable[[], None]]


@dataclass
class Observer:
    """Callbacks receiving the stream's deliveries."""
    next: Optional[Callable[[Any], None]] = None
    error: Optional[Callable[[BaseException], None]] = None
    complete: Optional[Callable[[], None]] = None


class SubscriptionObserver:
    """Sink handed to the subscriber function."""

    def __init__(self, subscription: Subscription):
        self._subscription = subscription

    @property
    def closed(self) -> bool:
        return self._subscription.closed

    def next(self, value: Any) -> None:
        if self.closed:
            return
        self._call("next", self._subscription.observer.next, value)

    def error(self, err: BaseException) -> None:
        if self.closed:
            return
        subscription = self._subscription
        subscription._closed = True
        handler = subscription.observer.error
        try:
            if handler is None:
                logger.error(f"Unhandled error in subscription: {err}")
            else:
                self._call("error", handler, err)
        finally:
            subscription._cleanup()

    def complete(self) -> None:
        if self.closed:
            return
        subscription = self._subscription
        subscription._closed = True
        try:
            self._call("complete", subscription.observer.complete)
        finally:
            subscription._cleanup()

    def _call(self, name: str, handler: Optional[Callable[..., None]], *args: Any) -> None:
        if handler is None:
            return
        try:
            handler(*args)
        except Exception as e:
            logger.error(f"Error in {name} handler: {e}", exc_info=True)


class Subscription:
    """
    Handle returned by ``Observable.subscribe``.

    ``unsubscribe()`` closes the stream and runs the teardown callback. It is
    safe to call any number of times, before or after the stream ended.
    """

    def __init__(self, observer: Observer, subscriber: Callable[[SubscriptionObserver], Teardown]):
        self.observer = observer
        self._closed = False
        self._teardown: Teardown = None

        sink = SubscriptionObserver(self)
        try:
            teardown = subscriber(sink)
        except Exception as e:
            sink.error(e)
            teardown = None

        self._teardown = teardown
        if self._closed:
            self._cleanup()

    @property
    def closed(self) -> bool:
        return self._closed

    def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cleanup()

    def _cleanup(self) -> None:
        teardown, self._teardown = self._teardown, None
        if teardown is None:
            return
        try:
            teardown()
        except Exception as e:
            logger.error(f"Error in subscription teardown: {e}", exc_info=True)


class Observable:
    """
    Lazy stream of results.

    Usage:
        observable = link.request(operation)
        subscription = observable.subscribe(
            next=lambda result: print(result["data"]),
            error=lambda err: print("failed", err),
        )
        ...
        subscription.unsubscribe()
    """

    def __init__(self, subscriber: Callable[[SubscriptionObserver], Teardown]):
        self._subscriber = subscriber

    def subscribe(
        self,
        observer: Optional[Observer] = None,
        *,
        next: Optional[Callable[[Any], None]] = None,
        error: Optional[Callable[[BaseException], None]] = None,
        complete: Optional[Callable[[], None]] = None,
    ) -> Subscription:
        """
        Start the stream.

        Args:
            observer: Observer with callbacks; alternatively pass them as keywords
            next: Called with each delivered value
            error: Called once with the failure
            complete: Called once when the stream ends normally

        Returns:
            Subscription used to cancel
        """
        if observer is None:
            observer = Observer(next=next, error=error, complete=complete)
        return Subscription(observer, self._subscriber)

    async def first(self) -> Any:
        """
        Await the first delivered value.

        Raises the delivered error, returns None if the stream completes
        without a value. Cancelling the awaiting task unsubscribes.
        """
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def on_next(value: Any) -> None:
            if not future.done():
                future.set_result(value)

        def on_error(err: BaseException) -> None:
            if not future.done():
                future.set_exception(err)

        def on_complete() -> None:
            if not future.done():
                future.set_result(None)

        subscription = self.subscribe(next=on_next, error=on_error, complete=on_complete)
        try:
            return await future
        finally:
            subscription.unsubscribe()
