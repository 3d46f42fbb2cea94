"""PokeAPI Payload Schemas - the shapes we accept from the upstream REST API.

Invariants:
    - Every upstream JSON document is validated by one of these models before use
    - Unknown fields are ignored (PokeAPI payloads are large; we keep what we read)
    - ChainLink is recursive to any depth

Design Decisions:
    - Pydantic models at the system boundary: a shape mismatch fails that one
      record with a ValidationError, never the whole batch
    - Field aliases keep PokeAPI's hyphenated keys ("official-artwork") out of Python names
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedResource(_Upstream):
    """Lightweight pointer into the upstream catalog."""
    name: str
    url: str


class PaginatedResponse(_Upstream):
    count: int
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource]


# --- /pokemon/{id} ------------------------------------------------------------

class PokemonTypeSlot(_Upstream):
    slot: int
    type: NamedResource


class OfficialArtwork(_Upstream):
    front_default: str | None = None


class OtherSprites(_Upstream):
    official_artwork: OfficialArtwork | None = Field(None, alias="official-artwork")


class PokemonSprites(_Upstream):
    front_default: str | None = None
    other: OtherSprites | None = None

    @property
    def preferred(self) -> str | None:
        """Official artwork when present, else the default front sprite."""
        artwork = self.other.official_artwork if self.other else None
        if artwork and artwork.front_default:
            return artwork.front_default
        return self.front_default


class PokemonStat(_Upstream):
    base_stat: int
    stat: NamedResource


class Pokemon(_Upstream):
    id: int
    name: str
    height: int
    weight: int
    types: list[PokemonTypeSlot]
    sprites: PokemonSprites
    species: NamedResource
    stats: list[PokemonStat] = Field(default_factory=list)


# --- /pokemon-species/{id} ----------------------------------------------------

class EvolutionChainRef(_Upstream):
    url: str


class PokemonSpecies(_Upstream):
    id: int
    name: str
    generation: NamedResource
    evolution_chain: EvolutionChainRef


# --- /evolution-chain/{id} ----------------------------------------------------

class ChainLink(_Upstream):
    species: NamedResource
    evolves_to: list[ChainLink] = Field(default_factory=list)


class EvolutionChain(_Upstream):
    id: int
    chain: ChainLink


# --- /generation, /type -------------------------------------------------------

class Generation(_Upstream):
    id: int
    name: str
    pokemon_species: list[NamedResource] = Field(default_factory=list)


class TypePokemonSlot(_Upstream):
    slot: int
    pokemon: NamedResource


class TypeDetail(_Upstream):
    id: int
    name: str
    pokemon: list[TypePokemonSlot] = Field(default_factory=list)


ChainLink.model_rebuild()
