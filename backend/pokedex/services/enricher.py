"""Enricher - joins a base Pokemon record with species, generation and evolution chain.

Invariants:
    - Returns Enriched | Skipped; no exception escapes (except cancellation)
    - Evolution chain failure degrades to [pokemon.name]; the record is kept
    - Species failure (network, status, not found, bad payload) skips the record
    - A species whose generation URL has no numeric id skips the record

Design Decisions:
    - Lookups live here, the join itself is pure (core/enrichment.py)
    - Errors mapped to SkipReason in one place (skip_from_error) so the batch
      loader and the detail view report the same reasons
"""

import logging

from pokedex.core.domain_types import SkipReason
from pokedex.core.enrichment import Enriched, EnrichResult, Skipped, build_enriched_pokemon
from pokedex.core.errors import (
    PayloadValidationError,
    PokedexError,
    ResourceNotFoundError,
    UpstreamNetworkError,
    UpstreamStatusError,
)
from pokedex.core.evolution import extract_evolution_names, extract_id_from_url
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient
from pokedex.schemas.pokeapi import Pokemon

logger = logging.getLogger(__name__)


def skip_from_error(key: str, error: PokedexError, species: bool = False) -> Skipped:
    """Map a typed upstream error onto a skip reason."""
    if isinstance(error, PayloadValidationError):
        reason = SkipReason.INVALID_PAYLOAD
    elif species:
        reason = SkipReason.SPECIES_UNAVAILABLE
    elif isinstance(error, ResourceNotFoundError):
        reason = SkipReason.NOT_FOUND
    elif isinstance(error, UpstreamNetworkError):
        reason = SkipReason.NETWORK
    elif isinstance(error, UpstreamStatusError):
        reason = SkipReason.UPSTREAM_STATUS
    else:
        reason = SkipReason.NETWORK
    return Skipped(key=key, reason=reason, detail=error.message)


async def _evolution_names(client: ResilientPokeAPIClient, url: str, fallback: str) -> list[str]:
    try:
        chain = await client.get_evolution_chain(url)
    except PokedexError as e:
        logger.info(
            f"Evolution chain unavailable, using own name: {e.message}",
            extra={"url": url, "error_code": e.code},
        )
        return [fallback]
    return extract_evolution_names(chain) or [fallback]


async def enrich_pokemon(client: ResilientPokeAPIClient, pokemon: Pokemon) -> EnrichResult:
    """Enrich one already-fetched Pokemon."""
    key = str(pokemon.id)
    try:
        species_id = extract_id_from_url(pokemon.species.url)
        species = await client.get_species(species_id)
    except ValueError as e:
        return Skipped(key=key, reason=SkipReason.INVALID_PAYLOAD, detail=f"species url: {e}")
    except PokedexError as e:
        return skip_from_error(key, e, species=True)

    try:
        extract_id_from_url(species.generation.url)
    except ValueError as e:
        return Skipped(key=key, reason=SkipReason.INVALID_PAYLOAD, detail=f"generation url: {e}")

    names = await _evolution_names(client, species.evolution_chain.url, pokemon.name)
    return Enriched(build_enriched_pokemon(pokemon, species, names))


async def get_enriched_pokemon(
    client: ResilientPokeAPIClient, id_or_name: int | str,
) -> EnrichResult:
    """Fetch base details by id or name, then enrich."""
    key = str(id_or_name)
    try:
        pokemon = await client.get_pokemon(id_or_name)
    except PokedexError as e:
        return skip_from_error(key, e)
    return await enrich_pokemon(client, pokemon)
