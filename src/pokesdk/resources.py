"""Handles binding a resource kind and identifier to a resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from pokesdk.context import RequestContext

if TYPE_CHECKING:
    from pokesdk.resolver import ResourceKind, Resolver


class ResourceHandle:
    """A single catalog resource that can be fetched on demand.

    Created by :meth:`~pokesdk.resolver.Resolver.pokemon`,
    :meth:`~pokesdk.resolver.Resolver.generation` or
    :meth:`~pokesdk.resolver.Resolver.resource`. Each :meth:`get` goes
    through the resolver, so repeated calls are served from the cache when
    caching is enabled.
    """

    def __init__(self, resolver: Resolver, kind: ResourceKind, id_or_name: str) -> None:
        self._resolver = resolver
        self._kind = kind
        self._id = id_or_name

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def id_or_name(self) -> str:
        return self._id

    def get(self, ctx: Optional[RequestContext] = None) -> BaseModel:
        """Fetch (or load from cache) and decode the resource."""
        return self._resolver.get_by_id_or_name(self._kind, self._id, ctx)

    def __repr__(self) -> str:
        return f"ResourceHandle(kind={self._kind.value!r}, id_or_name={self._id!r})"
