"""Canonical Pydantic models shared across all pokesdk modules.

The models fall into three groups:

**Configuration** -- :class:`ClientConfig`, the explicit default
configuration handed to :class:`~pokesdk.resolver.Resolver`.

**Listing envelopes** -- :class:`NamedResource`, :class:`NamedResourceList`
(the ``{count, results}`` body returned by list endpoints) and
:class:`NamesPage` (the names extracted from one page plus the
``has_more`` flag).

**Resource schemas** -- :class:`Pokemon`, :class:`Generation` and
:class:`PokemonForm` with their nested types. Unknown fields sent by the
API are ignored so that new upstream fields never break decoding.

Decoded resources are handed to callers as-is; treat them as read-only and
copy (``model.model_copy(deep=True)``) before mutating.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CACHE_TTL_SECONDS = 300.0


# --- Configuration ---


class ClientConfig(BaseModel):
    """Connection and caching settings for a :class:`~pokesdk.resolver.Resolver`.

    ``ClientConfig()`` is the default configuration: the public catalog
    endpoint, a 10 second timeout and caching disabled.

    Example::

        ClientConfig(cache_enabled=True, cache_ttl=60)
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Root URL of the catalog API"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds"
    )
    cache_enabled: bool = Field(
        default=False, description="Keep raw responses in an in-memory cache"
    )
    cache_ttl: float = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        description="Cache entry lifetime in seconds; <= 0 means entries never expire",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value


# --- Listing envelopes ---


class NamedResource(BaseModel):
    """A resource name paired with the URL it can be fetched from."""

    name: str
    url: str = ""


class NamedResourceList(BaseModel):
    """Body of a paginated list endpoint (``GET {base}/{kind}?limit=N&offset=M``)."""

    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: list[NamedResource] = Field(default_factory=list)


class NamesPage(BaseModel):
    """One page of resource names in server order.

    ``has_more`` is ``count > offset + limit`` computed with the *requested*
    limit, not with the number of names actually returned.
    """

    names: list[str] = Field(default_factory=list)
    has_more: bool = False


# --- Pokemon ---


class Ability(BaseModel):
    is_hidden: bool = False
    slot: int = 0
    ability: Optional[NamedResource] = None


class AbilityPast(BaseModel):
    generation: Optional[NamedResource] = None
    abilities: list[Ability] = Field(default_factory=list)


class PokemonType(BaseModel):
    slot: int = 0
    type: Optional[NamedResource] = None


class TypePast(BaseModel):
    generation: Optional[NamedResource] = None
    types: list[PokemonType] = Field(default_factory=list)


class GameIndex(BaseModel):
    game_index: int = 0
    version: Optional[NamedResource] = None


class HeldItem(BaseModel):
    item: Optional[NamedResource] = None
    rarity: int = 0


class MoveVersion(BaseModel):
    move_learn_method: Optional[NamedResource] = None
    version_group: Optional[NamedResource] = None
    level_learned_at: int = 0
    order: Optional[int] = None


class Move(BaseModel):
    move: Optional[NamedResource] = None
    version_group_details: list[MoveVersion] = Field(default_factory=list)


class Stat(BaseModel):
    stat: Optional[NamedResource] = None
    effort: int = 0
    base_stat: int = 0


class Sprites(BaseModel):
    """Sprite image URLs. Any of them may be absent for a given Pokémon."""

    front_default: Optional[str] = None
    front_shiny: Optional[str] = None
    front_female: Optional[str] = None
    front_shiny_female: Optional[str] = None
    back_default: Optional[str] = None
    back_shiny: Optional[str] = None
    back_female: Optional[str] = None
    back_shiny_female: Optional[str] = None


class Cries(BaseModel):
    latest: Optional[str] = None
    legacy: Optional[str] = None


class Pokemon(BaseModel):
    """A single Pokémon as returned by ``GET {base}/pokemon/{id_or_name}``.

    Heights are in decimetres and weights in hectograms, as served by the
    API.
    """

    id: int
    name: str
    base_experience: Optional[int] = None
    height: int = 0
    is_default: bool = False
    order: int = 0
    weight: int = 0
    abilities: list[Ability] = Field(default_factory=list)
    past_abilities: list[AbilityPast] = Field(default_factory=list)
    forms: list[NamedResource] = Field(default_factory=list)
    game_indices: list[GameIndex] = Field(default_factory=list)
    held_items: list[HeldItem] = Field(default_factory=list)
    location_area_encounters: str = ""
    moves: list[Move] = Field(default_factory=list)
    types: list[PokemonType] = Field(default_factory=list)
    past_types: list[TypePast] = Field(default_factory=list)
    sprites: Sprites = Field(default_factory=Sprites)
    cries: Cries = Field(default_factory=Cries)
    species: Optional[NamedResource] = None
    stats: list[Stat] = Field(default_factory=list)


class PokemonForm(BaseModel):
    """A visual form of a Pokémon. Only the sorting and flag fields are modelled."""

    id: int
    name: str
    order: int = 0
    form_order: int = 0
    is_default: bool = False
    is_battle_only: bool = False
    is_mega: bool = False


# --- Generation ---


class Name(BaseModel):
    """A resource name in one language."""

    name: str
    language: Optional[NamedResource] = None


class Generation(BaseModel):
    """A grouping of games, as returned by ``GET {base}/generation/{id_or_name}``."""

    id: int
    name: str
    abilities: list[NamedResource] = Field(default_factory=list)
    names: list[Name] = Field(default_factory=list)
    main_region: Optional[NamedResource] = None
    moves: list[NamedResource] = Field(default_factory=list)
    pokemon_species: list[NamedResource] = Field(default_factory=list)
    types: list[NamedResource] = Field(default_factory=list)
    version_groups: list[NamedResource] = Field(default_factory=list)
