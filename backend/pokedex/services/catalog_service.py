"""Catalog Service - list, detail and filter-option queries over PokeAPI.

Invariants:
    - No filters: only the requested page is enriched (server-side pagination)
    - Any filter: the first max_fetch Pokemon are loaded once, cached for
      cache_ttl_seconds, and returned whole so the caller filters/pages in memory
    - total is the size of the upstream catalog (up to pokemon_limit);
      total_filtered is the filtered count
    - get_detail raises ResourceNotFoundError when the entity cannot be enriched
    - Filter options exclude the "unknown" and "shadow" pseudo-types

Design Decisions:
    - Three cache tiers: upstream payload cache (client), loaded dataset cache
      (here), per-session CatalogState (caller)
    - Dataset cache stores the BatchLoadReport so skip counts survive cache hits
    - One dataset load at a time (asyncio.Lock): concurrent filtered requests on
      a cold cache wait for the first load and read its cached result
"""

import asyncio
import logging
from dataclasses import dataclass, field

from cachetools import TTLCache

from pokedex.config import Settings
from pokedex.core.domain_types import EXCLUDED_TYPES, SkipReason
from pokedex.core.enrichment import Enriched, Skipped
from pokedex.core.errors import ErrorContext, ResourceNotFoundError, UpstreamNetworkError
from pokedex.core.filters import apply_filters, has_active_filters
from pokedex.core.stats import StatsSummary, summarize_stats
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient
from pokedex.infrastructure.response_cache import response_cache
from pokedex.schemas.pokeapi import Generation, NamedResource, TypeDetail
from pokedex.schemas.pokemon import EnrichedPokemon, PokemonFilters
from pokedex.services.batch_loader import BatchLoadReport, load_all
from pokedex.services.enricher import get_enriched_pokemon

logger = logging.getLogger(__name__)


@dataclass
class CatalogListing:
    """One list query result.

    paginated=True: pokemon is the requested page only.
    paginated=False: pokemon is the whole cached dataset (unfiltered) and the
    caller applies filters and pagination itself.
    """
    pokemon: list[EnrichedPokemon]
    total: int
    total_filtered: int
    paginated: bool
    skipped: int = 0
    from_cache: bool = False


@dataclass
class PokemonDetail:
    pokemon: EnrichedPokemon
    stats: StatsSummary
    evolutions: list[EnrichedPokemon] = field(default_factory=list)


class CatalogService:
    """Assembles catalog views from the PokeAPI client."""

    DATASET_CACHE_KEY = "dataset"

    def __init__(
        self,
        client: ResilientPokeAPIClient,
        *,
        pokemon_limit: int = 1025,
        max_fetch: int = 500,
        batch_size: int = 20,
        generation_limit: int = 9,
        type_limit: int = 20,
        dataset_cache: TTLCache | None = None,
    ):
        self.client = client
        self.pokemon_limit = pokemon_limit
        self.max_fetch = max_fetch
        self.batch_size = batch_size
        self.generation_limit = generation_limit
        self.type_limit = type_limit
        self.dataset_cache = dataset_cache
        self._dataset_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, client: ResilientPokeAPIClient, settings: Settings) -> "CatalogService":
        return cls(
            client,
            pokemon_limit=settings.pokemon_limit,
            max_fetch=settings.max_fetch,
            batch_size=settings.batch_size,
            generation_limit=settings.generation_limit,
            type_limit=settings.type_limit,
            dataset_cache=response_cache(settings.cache_ttl_seconds, max_entries=4),
        )

    # --- Lists -----------------------------------------------------------------

    def _cached_dataset(self, cache_key: str) -> BatchLoadReport | None:
        if self.dataset_cache is None:
            return None
        return self.dataset_cache.get(cache_key)

    async def list_basic(self) -> list[NamedResource]:
        return await self.client.list_pokemon(self.pokemon_limit)

    async def load_dataset(
        self, refs: list[NamedResource] | None = None,
    ) -> tuple[BatchLoadReport, bool]:
        """The first max_fetch Pokemon, enriched. Returns (report, from_cache)."""
        cache_key = f"{self.DATASET_CACHE_KEY}:{self.max_fetch}"
        cached = self._cached_dataset(cache_key)
        if cached is not None:
            return cached, True

        async with self._dataset_lock:
            # a concurrent caller may have finished the load while we waited
            cached = self._cached_dataset(cache_key)
            if cached is not None:
                return cached, True

            if refs is None:
                refs = await self.list_basic()
            report = await load_all(self.client, refs[:self.max_fetch], self.batch_size)
            if self.dataset_cache is not None:
                self.dataset_cache[cache_key] = report
        logger.info(
            f"Loaded catalog dataset of {len(report.entities)} Pokemon",
            extra={"loaded": len(report.entities), "skipped": len(report.skipped)},
        )
        return report, False

    async def list_pokemon(
        self,
        filters: PokemonFilters | None = None,
        page: int = 1,
        page_size: int = 50,
    ) -> CatalogListing:
        filters = filters or PokemonFilters()

        if not has_active_filters(filters):
            refs = await self.list_basic()
            total = len(refs)
            offset = (max(page, 1) - 1) * page_size
            page_refs = refs[offset:offset + page_size]
            report = await load_all(self.client, page_refs, batch_size=max(page_size, 1))
            return CatalogListing(
                pokemon=report.entities,
                total=total,
                total_filtered=total,
                paginated=True,
                skipped=len(report.skipped),
            )

        refs = await self.list_basic()
        report, from_cache = await self.load_dataset(refs)
        filtered = apply_filters(report.entities, filters)
        return CatalogListing(
            pokemon=report.entities,
            total=len(refs),
            total_filtered=len(filtered),
            paginated=False,
            skipped=len(report.skipped),
            from_cache=from_cache,
        )

    # --- Detail ----------------------------------------------------------------

    async def _enrich_or_raise(self, id_or_name: int | str) -> EnrichedPokemon:
        result = await get_enriched_pokemon(self.client, id_or_name)
        if isinstance(result, Enriched):
            return result.pokemon
        if result.reason is SkipReason.NETWORK:
            raise UpstreamNetworkError(
                f"could not load Pokemon {id_or_name}",
                context=ErrorContext(resource_id=str(id_or_name)),
            )
        raise ResourceNotFoundError(
            "Pokemon", str(id_or_name),
            context=ErrorContext(debug_info={"skip_reason": result.reason.value}),
        )

    async def get_detail(self, id_or_name: int | str) -> PokemonDetail:
        """Enriched Pokemon + stat summary + every enrichable evolution-chain member."""
        pokemon = await self._enrich_or_raise(id_or_name)

        async def _member(name: str) -> EnrichedPokemon | None:
            if name == pokemon.name:
                return pokemon
            result = await get_enriched_pokemon(self.client, name)
            if isinstance(result, Skipped):
                logger.info(
                    f"Evolution member {name} unavailable: {result.reason.value}",
                    extra={"pokemon_id": name, "skip_reason": result.reason.value},
                )
                return None
            return result.pokemon

        members = await asyncio.gather(*(_member(n) for n in pokemon.evolution_chain))
        return PokemonDetail(
            pokemon=pokemon,
            stats=summarize_stats(pokemon.stats),
            evolutions=[m for m in members if m is not None],
        )

    # --- Filter options --------------------------------------------------------

    async def list_generations(self) -> list[Generation]:
        refs = await self.client.list_generations(self.generation_limit)
        return list(await asyncio.gather(*(self.client.get_generation(r.url) for r in refs)))

    async def list_types(self) -> list[TypeDetail]:
        refs = [r for r in await self.client.list_types(self.type_limit)
                if r.name not in EXCLUDED_TYPES]
        types = await asyncio.gather(*(self.client.get_type(r.url) for r in refs))
        return sorted(types, key=lambda t: t.name)
