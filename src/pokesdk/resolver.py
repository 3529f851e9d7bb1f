"""Cache-backed fetch-and-decode pipeline.

:class:`Resolver` is the main entry point of the SDK. It owns a
:class:`~pokesdk.client.FetchClient` and a response cache (a
:class:`~pokesdk.cache.NullCache` when caching is disabled) and exposes
two operations:

**Single resources** (:meth:`Resolver.get_by_id_or_name`)::

    url = {base}/{kind}/{id_or_name}
    cache hit and decodes  -> return decoded value, no network I/O
    otherwise              -> fetch -> decode -> cache raw bytes -> return

The cache holds the raw response bytes, never decoded objects, so every
hit decodes a fresh value. A cached entry that no longer decodes is
treated as a miss and refetched.

**Name listings** (:meth:`Resolver.get_names_page`) are always fetched
live and never touch the cache.

Handles returned by :meth:`Resolver.pokemon`, :meth:`Resolver.generation`,
:meth:`Resolver.pokemon_list` and :meth:`Resolver.generation_list` bind a
kind and identifier (or page) to the resolver for convenient repeated use.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from pokesdk.cache import CacheBackend, NullCache, build_cache
from pokesdk.client import FetchClient
from pokesdk.context import RequestContext
from pokesdk.exceptions import DecodeError, InvalidUsageError, PokeSDKError
from pokesdk.models import ClientConfig, Generation, NamedResourceList, NamesPage, Pokemon
from pokesdk.output import get_output

if TYPE_CHECKING:
    from pokesdk.pagination import NamesCursor
    from pokesdk.resources import ResourceHandle

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceKind(str, enum.Enum):
    """Catalog resource kinds and the URL path segment each one lives under."""

    POKEMON = "pokemon"
    GENERATION = "generation"

    @classmethod
    def parse(cls, value: ResourceKind | str) -> ResourceKind:
        """Coerce *value* to a kind, rejecting unknown kinds with :class:`InvalidUsageError`."""
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise InvalidUsageError(f"Unknown resource kind '{value}' (expected one of: {known})") from None

    @property
    def model(self) -> type[BaseModel]:
        """The schema a single resource of this kind decodes into."""
        return _KIND_MODELS[self]


_KIND_MODELS: dict[ResourceKind, type[BaseModel]] = {
    ResourceKind.POKEMON: Pokemon,
    ResourceKind.GENERATION: Generation,
}


@dataclass(frozen=True)
class CacheMiss:
    """Result of a cache lookup that produced no usable value.

    ``reason`` is ``"absent"`` (no entry, expired, or caching disabled) or
    ``"undecodable"`` (an entry exists but no longer matches the schema).
    """

    reason: str


class Resolver:
    """Fetches, decodes and caches catalog resources.

    Args:
        config: Connection and cache settings. Defaults to
            ``ClientConfig()``.
        fetch_client: Optional pre-built fetch client (tests inject one
            backed by :class:`httpx.MockTransport`).
        cache: Optional cache backend overriding the one derived from
            *config*.

    Example::

        resolver = Resolver(ClientConfig(cache_enabled=True, cache_ttl=60))
        pikachu = resolver.pokemon("pikachu").get()
        first_page = resolver.pokemon_list(page=1, page_size=5).get()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        fetch_client: Optional[FetchClient] = None,
        cache: Optional[CacheBackend] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._fetch_client = fetch_client or FetchClient(timeout=self._config.timeout)
        self._cache = cache if cache is not None else build_cache(self._config)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cache(self) -> CacheBackend:
        return self._cache

    def with_config(self, config: ClientConfig) -> Resolver:
        """Return a new resolver built from *config*.

        The current resolver is left untouched; its connection pool and
        cache are not shared with the new one.
        """
        return Resolver(config)

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Resolver:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._fetch_client.close()

    # ------------------------------------------------------------------ #
    # Handles
    # ------------------------------------------------------------------ #

    def resource(self, kind: ResourceKind | str, id_or_name: str | int) -> ResourceHandle:
        """Return a handle for one resource of *kind*."""
        from pokesdk.resources import ResourceHandle

        return ResourceHandle(self, ResourceKind.parse(kind), str(id_or_name))

    def names(
        self,
        kind: ResourceKind | str,
        page: int = 1,
        page_size: int = 20,
    ) -> NamesCursor:
        """Return a cursor over the names of *kind*, starting at *page*."""
        from pokesdk.pagination import NamesCursor

        return NamesCursor(self, ResourceKind.parse(kind), page=page, page_size=page_size)

    def pokemon(self, id_or_name: str | int) -> ResourceHandle:
        return self.resource(ResourceKind.POKEMON, id_or_name)

    def pokemon_list(self, page: int = 1, page_size: int = 20) -> NamesCursor:
        return self.names(ResourceKind.POKEMON, page=page, page_size=page_size)

    def generation(self, id_or_name: str | int) -> ResourceHandle:
        return self.resource(ResourceKind.GENERATION, id_or_name)

    def generation_list(self, page: int = 1, page_size: int = 20) -> NamesCursor:
        return self.names(ResourceKind.GENERATION, page=page, page_size=page_size)

    # ------------------------------------------------------------------ #
    # Core operations
    # ------------------------------------------------------------------ #

    def get_by_id_or_name(
        self,
        kind: ResourceKind | str,
        id_or_name: str | int,
        ctx: Optional[RequestContext] = None,
    ) -> BaseModel:
        """Return the decoded resource of *kind* identified by *id_or_name*.

        The cache is consulted first; a hit skips the network entirely. On
        a miss the resource is fetched, decoded, and its raw body stored
        under the request URL.

        Args:
            kind: Resource kind (``"pokemon"``, ``"generation"``).
            id_or_name: Numeric ID or slug name.
            ctx: Optional cancellation/deadline context.

        Returns:
            A :class:`~pokesdk.models.Pokemon` or
            :class:`~pokesdk.models.Generation` instance.

        Raises:
            NotFoundError: The resource does not exist.
            RequestFailedError: The API answered with another non-200 status.
            TransportError: Network failure, timeout or cancellation.
            DecodeError: The freshly fetched body did not decode.
            InvalidUsageError: *id_or_name* is empty.
        """
        kind = ResourceKind.parse(kind)
        identifier = str(id_or_name).strip()
        if not identifier:
            raise InvalidUsageError(f"An ID or name is required to fetch a {kind.value}")

        url = self._resource_url(kind, identifier)
        label = f"{kind.value} '{identifier}'"

        cached = self._load_from_cache(url, kind.model)
        if not isinstance(cached, CacheMiss):
            return cached
        if not isinstance(self._cache, NullCache):
            get_output().debug(f"Cache miss ({cached.reason}): {url}")

        body = self._fetch(url, ctx, label)
        result = self._decode(body, kind.model, url, label)
        self._cache.put(url, body)
        return result

    def get_names_page(
        self,
        kind: ResourceKind | str,
        limit: int,
        offset: int,
        ctx: Optional[RequestContext] = None,
    ) -> NamesPage:
        """Fetch one page of resource names, bypassing the cache.

        Args:
            kind: Resource kind to list.
            limit: Page size requested from the server.
            offset: Number of entries to skip.
            ctx: Optional cancellation/deadline context.

        Returns:
            A :class:`~pokesdk.models.NamesPage` whose ``names`` keep server
            order and whose ``has_more`` is ``count > offset + limit``.

        Raises:
            InvalidUsageError: *limit* < 1 or *offset* < 0.
            NotFoundError, RequestFailedError, TransportError, DecodeError:
                As for :meth:`get_by_id_or_name`.
        """
        kind = ResourceKind.parse(kind)
        if limit < 1:
            raise InvalidUsageError(f"limit must be at least 1, got {limit}")
        if offset < 0:
            raise InvalidUsageError(f"offset must not be negative, got {offset}")

        url = self._list_url(kind, limit, offset)
        label = f"{kind.value} names (limit={limit}, offset={offset})"

        body = self._fetch(url, ctx, label)
        listing = self._decode(body, NamedResourceList, url, label)

        return NamesPage(
            names=[result.name for result in listing.results],
            has_more=listing.count > offset + limit,
        )

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _resource_url(self, kind: ResourceKind, identifier: str) -> str:
        return f"{self._config.base_url}/{kind.value}/{quote(identifier, safe='')}"

    def _list_url(self, kind: ResourceKind, limit: int, offset: int) -> str:
        query = httpx.QueryParams({"limit": limit, "offset": offset})
        return f"{self._config.base_url}/{kind.value}?{query}"

    def _load_from_cache(self, url: str, model: type[ModelT]) -> Union[ModelT, CacheMiss]:
        """Decode the cached body for *url*, or report why there is none."""
        output = get_output()
        data = self._cache.get(url)
        if data is None:
            return CacheMiss("absent")
        # pydantic.ValidationError is a ValueError, as is invalid UTF-8.
        try:
            result = model.model_validate_json(data)
        except ValueError as exc:
            output.debug(f"Discarding undecodable cache entry for {url}: {type(exc).__name__}")
            return CacheMiss("undecodable")
        output.debug(f"Cache hit: {url}")
        return result

    def _fetch(self, url: str, ctx: Optional[RequestContext], label: str) -> bytes:
        try:
            return self._fetch_client.fetch(url, ctx)
        except PokeSDKError as exc:
            raise exc.with_context(f"Failed to fetch {label}") from exc

    @staticmethod
    def _decode(body: bytes, model: type[ModelT], url: str, label: str) -> ModelT:
        try:
            return model.model_validate_json(body)
        except ValueError as exc:
            raise DecodeError(f"Failed to decode {label}: {exc}", url=url) from exc
