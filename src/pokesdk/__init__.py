"""pokesdk -- a caching client for the public Pokémon catalog API.

The SDK fetches single resources (Pokémon, generations) and paginated
name listings. Raw responses can be kept in an in-memory cache with a
time-to-live so that repeated lookups skip the network.

Typical usage::

    from pokesdk import ClientConfig, Resolver

    resolver = Resolver(ClientConfig(cache_enabled=True, cache_ttl=60))
    pikachu = resolver.pokemon("pikachu").get()

    for names in resolver.pokemon_list(page_size=50):
        ...

Modules:
    resolver: Cache-backed fetch-and-decode pipeline.
    pagination: Stateful cursor over name listings.
    cache: In-memory TTL response cache.
    client: HTTP GET client with status classification.
    models: Pydantic models for configuration and resources.
    exceptions: Exception hierarchy with exit-code mapping.
    app: ``pokesdk`` command line.
"""

__version__ = "0.1.0"

from pokesdk.context import RequestContext  # noqa: E402
from pokesdk.exceptions import (  # noqa: E402
    DecodeError,
    InvalidUsageError,
    NotFoundError,
    PagesExhausted,
    PokeSDKError,
    RequestFailedError,
    TransportError,
)
from pokesdk.models import ClientConfig, Generation, Pokemon  # noqa: E402
from pokesdk.pagination import CursorState, NamesCursor  # noqa: E402
from pokesdk.resolver import Resolver, ResourceKind  # noqa: E402

__all__ = [
    "__version__",
    "ClientConfig",
    "CursorState",
    "DecodeError",
    "Generation",
    "InvalidUsageError",
    "NamesCursor",
    "NotFoundError",
    "PagesExhausted",
    "Pokemon",
    "PokeSDKError",
    "RequestContext",
    "RequestFailedError",
    "Resolver",
    "ResourceKind",
    "TransportError",
]
