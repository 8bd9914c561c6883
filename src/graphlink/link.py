"""
HTTP link - the terminal stage that sends an Operation over the network.

Usage:
    from graphlink import HttpLink, Operation

    link = HttpLink(
        "https://api.example.com/graphql",
        headers={"authorization": "Bearer token"},
    )

    operation = Operation(query="{ viewer { id } }")
    result = await link.execute(operation)

Per request the link:
1. selects the URI (context ``uri`` > link uri or uri function)
2. merges fallback, link and context configuration
3. encodes the body and attaches an abort signal if the fetcher supports one
4. awaits the fetcher, stores the raw response in the context as ``response``
5. delivers ``next(result)`` + ``complete()``, or a single ``error``

An aborted request delivers nothing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from .core.config import (
    FALLBACK_CONFIG,
    HttpConfig,
    HttpSettings,
    QueryPrinter,
    default_print_query,
    select_options_and_body,
)
from .core.errors import (
    AbortError,
    ConstructionError,
    GraphLinkError,
    RequestConfigError,
    TransportError,
)
from .core.observable import Observable, SubscriptionObserver, Teardown
from .core.operation import Operation
from .core.settings import LinkSettings, load_settings
from .runtime.body import serialize_body
from .runtime.cancellation import create_signal_if_supported, supports_abort
from .runtime.fetch import Fetcher, HttpxFetcher, check_fetcher
from .runtime.response import parse_and_check_response
from .runtime.uri import UriFunction, select_uri

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Operation], Observable]


class HttpLink:
    """
    Link sending each Operation as one HTTP request.

    Link configuration is fixed at construction; per-request overrides are
    read from the Operation context keys ``http``, ``fetch_options``,
    ``credentials``, ``headers`` and ``uri``.
    """

    def __init__(
        self,
        uri: Optional[Union[str, UriFunction]] = None,
        *,
        fetch: Optional[Fetcher] = None,
        include_extensions: Optional[bool] = None,
        fetch_options: Optional[dict[str, Any]] = None,
        credentials: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        print_query: QueryPrinter = default_print_query,
        settings: Optional[LinkSettings] = None,
    ):
        """
        Initialize link.

        Args:
            uri: Endpoint URI, or a function of the Operation returning one
                (default: GRAPHLINK_URI or "/graphql")
            fetch: Transport callable (default: HttpxFetcher)
            include_extensions: Send ``operation.extensions`` in the body
            fetch_options: Extra options passed to the fetcher
            credentials: Credentials mode passed to the fetcher
            headers: Headers sent with every request
            print_query: Renders query documents as text
            settings: Environment defaults (default: loaded from env)

        Raises:
            ConstructionError: If ``fetch`` is not callable or the link
                configuration is invalid
        """
        check_fetcher(fetch)
        settings = settings or load_settings()

        self.uri = uri if uri is not None else settings.URI
        self.fetcher = fetch if fetch is not None else HttpxFetcher(
            timeout=settings.TIMEOUT,
            base_url=settings.BASE_URL,
        )
        self._owns_fetcher = fetch is None
        self.print_query = print_query

        if include_extensions is None:
            include_extensions = settings.INCLUDE_EXTENSIONS
        try:
            self.link_config = HttpConfig(
                http=HttpSettings(include_extensions=include_extensions),
                fetch_options=fetch_options,
                credentials=credentials,
                headers=headers,
            )
        except ValidationError as e:
            raise ConstructionError(f"Invalid link configuration: {e}") from e

        # Abort capability is a property of the fetcher, checked once
        self._abort_supported = supports_abort(self.fetcher)

        # Strong references to running request tasks
        self._tasks: set[asyncio.Task] = set()

    def request(self, operation: Operation) -> Observable:
        """Return a lazy stream sending ``operation`` when subscribed."""

        def subscriber(observer: SubscriptionObserver) -> Teardown:
            try:
                chosen_uri = select_uri(operation, self.uri)
            except Exception as e:
                raise RequestConfigError("Could not select URI", e) from e
            try:
                context_config = HttpConfig.from_context(operation.get_context())
            except ValidationError as e:
                raise RequestConfigError("Invalid context configuration", e) from e
            descriptor = select_options_and_body(
                operation,
                FALLBACK_CONFIG,
                self.link_config,
                context_config,
                print_query=self.print_query,
            )
            options = descriptor.options
            options["body"] = serialize_body(descriptor.body)

            controller, signal = create_signal_if_supported(self._abort_supported)
            if controller is not None:
                options["signal"] = signal

            task = asyncio.get_running_loop().create_task(
                self._send(operation, chosen_uri, options, observer)
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

            def teardown() -> None:
                if controller is not None:
                    controller.abort()

            return teardown

        return Observable(subscriber)

    async def _send(
        self,
        operation: Operation,
        uri: str,
        options: dict[str, Any],
        observer: SubscriptionObserver,
    ) -> None:
        """Await the fetcher and deliver the outcome to the observer."""
        logger.debug(f"Sending {options.get('method')} {uri} (operation: {operation.operation_name})")
        try:
            response = await self.fetcher(uri, options)
            operation.set_context({"response": response})
            result = parse_and_check_response(operation, response)
        except AbortError:
            # Unsubscribe already cleaned up
            logger.debug(f"Request to {uri} aborted")
            return
        except GraphLinkError as e:
            self._fail(observer, uri, e)
            return
        except Exception as e:
            self._fail(observer, uri, TransportError(e))
            return

        if observer.closed:
            logger.debug(f"Discarding response from {uri}: subscriber gone")
            return
        observer.next(result)
        observer.complete()

    def _fail(self, observer: SubscriptionObserver, uri: str, error: GraphLinkError) -> None:
        if observer.closed:
            logger.debug(f"Discarding failure from {uri}: subscriber gone")
            return
        logger.warning(f"Request to {uri} failed: {error}")
        observer.error(error)

    async def execute(self, operation: Operation) -> dict[str, Any]:
        """
        Send an operation and await its result.

        Raises:
            GraphLinkError: The delivered failure
        """
        return await self.request(operation).first()

    async def close(self) -> None:
        """Close the default fetcher's HTTP client."""
        if self._owns_fetcher and isinstance(self.fetcher, HttpxFetcher):
            await self.fetcher.close()


def create_http_link(
    uri: Optional[Union[str, UriFunction]] = None,
    **options: Any,
) -> RequestHandler:
    """
    Build a request handler ``(operation) -> Observable``.

    Accepts the same arguments as HttpLink.
    """
    return HttpLink(uri, **options).request
