"""Stateful cursor over a paginated name listing.

A :class:`NamesCursor` tracks ``page`` (1-based) and a fixed
``page_size``; the offset sent to the server is always
``(page - 1) * page_size``. It moves through two states:

``ACTIVE``
    :meth:`NamesCursor.advance` fetches the current page. If the server
    reports more results the page counter is incremented; otherwise the
    cursor becomes ``EXHAUSTED``. The page fetched by that final call is
    still returned.

``EXHAUSTED``
    Terminal. Every further :meth:`NamesCursor.advance` raises
    :class:`~pokesdk.exceptions.PagesExhausted` without touching the
    network. There is no reset.

:meth:`NamesCursor.get` re-reads the current page without changing state.

Cursors are not thread-safe: share one between threads only behind an
external lock.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Iterator, Optional

from pokesdk.context import RequestContext
from pokesdk.exceptions import InvalidUsageError, PagesExhausted

if TYPE_CHECKING:
    from pokesdk.resolver import ResourceKind, Resolver


class CursorState(str, enum.Enum):
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class NamesCursor:
    """Page-by-page iteration over the names of one resource kind.

    Args:
        resolver: The resolver issuing the list requests.
        kind: Resource kind being listed.
        page: First page to fetch (1-based).
        page_size: Number of names per page; fixed for the cursor's lifetime.

    Example::

        cursor = resolver.pokemon_list(page=1, page_size=5)
        first = cursor.advance()
        second = cursor.advance()

        for names in resolver.generation_list(page_size=3):
            print(names)
    """

    def __init__(
        self,
        resolver: Resolver,
        kind: ResourceKind,
        page: int = 1,
        page_size: int = 20,
    ) -> None:
        if page < 1:
            raise InvalidUsageError(f"page must be at least 1, got {page}")
        if page_size < 1:
            raise InvalidUsageError(f"page_size must be at least 1, got {page_size}")
        self._resolver = resolver
        self._kind = kind
        self._page = page
        self._page_size = page_size
        self._state = CursorState.ACTIVE

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def limit(self) -> int:
        """Alias of :attr:`page_size`; the value sent as ``limit``."""
        return self._page_size

    @property
    def offset(self) -> int:
        return (self._page - 1) * self._page_size

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state is CursorState.EXHAUSTED

    def get(self, ctx: Optional[RequestContext] = None) -> list[str]:
        """Return the names on the current page. Never changes cursor state."""
        return self._resolver.get_names_page(self._kind, self._page_size, self.offset, ctx).names

    def advance(self, ctx: Optional[RequestContext] = None) -> list[str]:
        """Return the current page and move the cursor forward.

        Raises:
            PagesExhausted: The last page was already delivered.
            NotFoundError, RequestFailedError, TransportError, DecodeError:
                The fetch failed; the cursor state is left unchanged.
        """
        if self._state is CursorState.EXHAUSTED:
            raise PagesExhausted(
                f"No more {self._kind.value} names after page {self._page}"
            )

        result = self._resolver.get_names_page(self._kind, self._page_size, self.offset, ctx)
        if result.has_more:
            self._page += 1
        else:
            self._state = CursorState.EXHAUSTED
        return result.names

    def __iter__(self) -> Iterator[list[str]]:
        """Yield pages via :meth:`advance` until the cursor is exhausted."""
        while True:
            try:
                yield self.advance()
            except PagesExhausted:
                return

    def __repr__(self) -> str:
        return (
            f"NamesCursor(kind={self._kind.value!r}, page={self._page}, "
            f"page_size={self._page_size}, state={self._state.value!r})"
        )
