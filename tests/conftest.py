"""Shared test fixtures for pokesdk.

Provides an in-process fake of the catalog API (served through
:class:`httpx.MockTransport`), factories for resolvers wired to it, and
automatic reset of the global output manager between tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from pokesdk.cache import CacheBackend
from pokesdk.client import FetchClient
from pokesdk.models import ClientConfig
from pokesdk.output import reset_output
from pokesdk.resolver import Resolver


FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://pokeapi.test/api/v2"

POKEMON_NAMES = [
    "bulbasaur", "ivysaur", "venusaur", "charmander", "charmeleon",
    "charizard", "squirtle", "wartortle", "blastoise", "caterpie",
    "metapod", "butterfree", "weedle", "kakuna", "beedrill",
    "pidgey", "pidgeotto", "pidgeot", "rattata", "raticate",
    "spearow", "fearow", "ekans",
]

GENERATION_NAMES = [
    "generation-i", "generation-ii", "generation-iii", "generation-iv",
    "generation-v", "generation-vi", "generation-vii", "generation-viii",
    "generation-ix",
]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake catalog server
# ---------------------------------------------------------------------------


class FakeCatalog:
    """Request handler emulating the catalog API for :class:`httpx.MockTransport`.

    Single resources are served from ``resources`` keyed by
    ``(kind, id_or_name)``; unknown keys answer 404. Listings slice
    ``names[kind]`` by the ``limit``/``offset`` query parameters. Every
    request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.resources: dict[tuple[str, str], bytes] = {}
        self.names: dict[str, list[str]] = {}
        self.count_override: dict[str, int] = {}
        self.status_override: dict[str, int] = {}
        self.requests: list[httpx.Request] = []

    def add_resource(self, kind: str, body: bytes, *keys: str) -> None:
        for key in keys:
            self.resources[(kind, key)] = body

    def calls(self, path: str) -> int:
        """Number of requests whose path (below the API root) equals *path*."""
        return sum(1 for request in self.requests if self._relative_path(request) == path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._relative_path(request)

        if path in self.status_override:
            return httpx.Response(self.status_override[path], json={"detail": "forced"})

        parts = path.split("/")
        if len(parts) == 1:
            return self._listing(parts[0], request.url.params)
        if len(parts) == 2:
            body = self.resources.get((parts[0], parts[1]))
            if body is None:
                return httpx.Response(404, text="Not Found")
            return httpx.Response(
                200, content=body, headers={"content-type": "application/json"}
            )
        return httpx.Response(404, text="Not Found")

    def _listing(self, kind: str, params: httpx.QueryParams) -> httpx.Response:
        if kind not in self.names:
            return httpx.Response(404, text="Not Found")
        names = self.names[kind]
        limit = int(params.get("limit", 20))
        offset = int(params.get("offset", 0))
        results = [
            {"name": name, "url": f"{BASE_URL}/{kind}/{offset + i + 1}/"}
            for i, name in enumerate(names[offset:offset + limit])
        ]
        return httpx.Response(
            200,
            json={
                "count": self.count_override.get(kind, len(names)),
                "next": None,
                "previous": None,
                "results": results,
            },
        )

    @staticmethod
    def _relative_path(request: httpx.Request) -> str:
        prefix = httpx.URL(BASE_URL).path
        path = request.url.path
        if path.startswith(prefix):
            path = path[len(prefix):]
        return path.strip("/")


@pytest.fixture
def pikachu_body() -> bytes:
    return (FIXTURES_DIR / "pikachu.json").read_bytes()


@pytest.fixture
def generation_body() -> bytes:
    return (FIXTURES_DIR / "generation-7.json").read_bytes()


@pytest.fixture
def catalog(pikachu_body: bytes, generation_body: bytes) -> FakeCatalog:
    """A fake catalog with pikachu, generation 7, and name listings."""
    fake = FakeCatalog()
    fake.add_resource("pokemon", pikachu_body, "pikachu", "25")
    fake.add_resource("generation", generation_body, "7", "generation-vii")
    fake.names["pokemon"] = list(POKEMON_NAMES)
    fake.names["generation"] = list(GENERATION_NAMES)
    return fake


# ---------------------------------------------------------------------------
# Resolver factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_resolver(catalog: FakeCatalog) -> Callable[..., Resolver]:
    """Factory building resolvers whose HTTP traffic goes to ``catalog``."""
    created: list[Resolver] = []

    def _make(
        cache_enabled: bool = False,
        cache_ttl: float = 300,
        cache: Optional[CacheBackend] = None,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ) -> Resolver:
        config = ClientConfig(
            base_url=BASE_URL,
            timeout=5,
            cache_enabled=cache_enabled,
            cache_ttl=cache_ttl,
        )
        fetch_client = FetchClient(
            timeout=config.timeout,
            transport=httpx.MockTransport(handler or catalog),
        )
        resolver = Resolver(config, fetch_client=fetch_client, cache=cache)
        created.append(resolver)
        return resolver

    yield _make

    for resolver in created:
        resolver.close()


@pytest.fixture
def resolver(make_resolver: Callable[..., Resolver]) -> Resolver:
    """Resolver with caching disabled."""
    return make_resolver(cache_enabled=False)


@pytest.fixture
def cached_resolver(make_resolver: Callable[..., Resolver]) -> Resolver:
    """Resolver with the in-memory cache enabled."""
    return make_resolver(cache_enabled=True)
