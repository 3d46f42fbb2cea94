"""Catalog Schemas - the denormalized view model and the API response shapes.

Invariants:
    - EnrichedPokemon.evolution_chain is never empty (own name as fallback)
    - PokemonFilters strips whitespace; an empty criterion means "no filter"
    - Response models carry plain data only - no behaviour

Design Decisions:
    - EnrichedPokemon is frozen: it is built once and then shared between the
      dataset cache, filtered views and responses
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pokedex.core.domain_types import GenerationId, PokemonId


class TypeRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    slot: int
    name: str


class StatValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: int


class EnrichedPokemon(BaseModel):
    """One catalog entry joined with its species, generation and evolution chain."""
    model_config = ConfigDict(frozen=True)

    id: PokemonId
    name: str
    height: int
    weight: int
    types: tuple[TypeRef, ...]
    sprite: str | None = None
    generation_id: GenerationId
    generation_name: str
    evolution_chain: tuple[str, ...] = Field(min_length=1)
    stats: tuple[StatValue, ...] = ()

    @property
    def type_names(self) -> set[str]:
        return {t.name for t in self.types}


class PokemonFilters(BaseModel):
    """Filter criteria as received from the query string."""
    model_config = ConfigDict(frozen=True)

    type: str | None = Field(None, max_length=200)
    generation: str | None = Field(None, max_length=10)
    search: str | None = Field(None, max_length=100)

    @field_validator("type", "generation", "search")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


# --- Responses ----------------------------------------------------------------

class PokemonListResponse(BaseModel):
    pokemon: list[EnrichedPokemon]
    page: int
    total_pages: int
    total: int
    total_filtered: int
    page_numbers: list[int | str]
    showing_from: int
    showing_to: int
    skipped: int = 0


class StatBar(BaseModel):
    name: str
    label: str
    value: int
    percent: float


class StatsSummaryResponse(BaseModel):
    total: int
    bars: list[StatBar]


class PokemonDetailResponse(BaseModel):
    pokemon: EnrichedPokemon
    display_name: str
    number: str
    height: str
    weight: str
    stats: StatsSummaryResponse
    evolutions: list[EnrichedPokemon]


class GenerationOption(BaseModel):
    id: int
    name: str
    label: str
    species_count: int


class TypeOption(BaseModel):
    id: int
    name: str
    label: str
    pokemon_count: int
