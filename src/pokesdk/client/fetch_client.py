"""Blocking HTTP GET client with status classification.

This module provides :class:`FetchClient`, the only component that talks
to the network. It wraps :class:`httpx.Client` and maps every outcome to
one of three results:

- **200** -- the full response body is returned as ``bytes``.
- **404** -- :class:`~pokesdk.exceptions.NotFoundError`.
- **anything else** -- :class:`~pokesdk.exceptions.RequestFailedError`
  carrying the status code.

Network failures (connect, timeout, protocol errors) and context
cancellation raise :class:`~pokesdk.exceptions.TransportError` with the
underlying cause chained. There is no retry and no backoff; redirects are
followed by httpx.
"""

from __future__ import annotations

import threading
from typing import Optional

import httpx

from pokesdk import __version__
from pokesdk.context import RequestContext
from pokesdk.exceptions import NotFoundError, RequestFailedError, TransportError
from pokesdk.models import DEFAULT_TIMEOUT_SECONDS
from pokesdk.output import get_output


class FetchClient:
    """Synchronous GET client for the catalog API.

    The underlying :class:`httpx.Client` is opened lazily on the first
    fetch (or on ``__enter__``) and released by :meth:`close`, so the
    client works both as a context manager and as a long-lived object.

    Args:
        timeout: Default per-request timeout in seconds.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with FetchClient(timeout=10) as client:
            body = client.fetch("https://pokeapi.co/api/v2/generation/7")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> FetchClient:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the connection pool. Safe to call more than once."""
        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def fetch(self, url: str, ctx: Optional[RequestContext] = None) -> bytes:
        """GET *url* and return the response body.

        Args:
            url: Absolute request URL, query string included.
            ctx: Optional cancellation/deadline context. The effective
                timeout is the smaller of the client timeout and the
                context's remaining time.

        Returns:
            The raw body of a 200 response.

        Raises:
            NotFoundError: On 404.
            RequestFailedError: On any other non-200 status.
            TransportError: On network errors, timeouts, or when *ctx* is
                cancelled or past its deadline.
        """
        ctx = ctx or RequestContext.background()
        self._check_context(ctx, url)

        client = self._ensure_client()
        output = get_output()
        output.debug(f"GET {url}")

        try:
            response = client.get(url, timeout=self._effective_timeout(ctx))
        except httpx.RequestError as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        # A response that arrives after cancellation is discarded.
        self._check_context(ctx, url)

        output.debug(f"HTTP {response.status_code} for {url}")
        self._map_response_status(response, url)
        return response.content

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _ensure_client(self) -> httpx.Client:
        client = self._client
        if client is not None:
            return client
        with self._client_lock:
            if self._client is None:
                kwargs = {}
                if self._transport is not None:
                    kwargs["transport"] = self._transport
                self._client = httpx.Client(
                    timeout=self._timeout,
                    follow_redirects=True,
                    headers={
                        "Accept": "application/json",
                        "User-Agent": f"pokesdk/{__version__}",
                    },
                    **kwargs,
                )
            return self._client

    def _effective_timeout(self, ctx: RequestContext) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self._timeout
        return min(self._timeout, remaining)

    @staticmethod
    def _check_context(ctx: RequestContext, url: str) -> None:
        reason = ctx.error_reason()
        if reason is not None:
            raise TransportError(f"Request to {url} aborted: {reason}", url=url)

    @staticmethod
    def _map_response_status(response: httpx.Response, url: str) -> None:
        """Raise a typed exception for any status other than 200."""
        status = response.status_code
        if status == 200:
            return
        if status == 404:
            raise NotFoundError(f"HTTP 404: resource not found at {url}", url=url)
        raise RequestFailedError(
            f"HTTP {status}: unexpected response from {url}",
            url=url,
            status_code=status,
        )
