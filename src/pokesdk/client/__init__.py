"""HTTP fetch layer for pokesdk.

:class:`FetchClient` wraps :class:`httpx.Client`, issues GET requests
against absolute URLs, classifies the HTTP status and returns the raw
response body. Decoding is left to the caller
(:class:`~pokesdk.resolver.Resolver`).

Example::

    from pokesdk.client import FetchClient

    with FetchClient(timeout=5.0) as client:
        body = client.fetch("https://pokeapi.co/api/v2/pokemon/25")
"""

from pokesdk.client.fetch_client import FetchClient

__all__ = ["FetchClient"]
