"""Batch Loader - fetches and enriches many refs with bounded concurrency.

Invariants:
    - Batches of batch_size run one after another; items inside a batch run concurrently
    - Output order == input order (indexed gather, never append-on-complete)
    - A failed item never aborts its batch: it becomes a Skipped entry
    - Pokemon ids are unique in the output (first occurrence wins)
    - Cancelling the caller cancels every in-flight item of the current batch

Design Decisions:
    - asyncio.gather per batch: concurrency bound == batch size, no semaphore needed
    - Skips are counted and logged per reason instead of vanishing silently
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from pokedex.core.domain_types import PokemonId, SkipReason
from pokedex.core.enrichment import Enriched, EnrichResult, Skipped
from pokedex.core.evolution import extract_id_from_url
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient
from pokedex.schemas.pokeapi import NamedResource
from pokedex.schemas.pokemon import EnrichedPokemon
from pokedex.services.enricher import get_enriched_pokemon

logger = logging.getLogger(__name__)


@dataclass
class BatchLoadReport:
    """What a load produced: entities in input order, plus every skip."""
    entities: list[EnrichedPokemon] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)

    @property
    def skip_counts(self) -> dict[str, int]:
        return dict(Counter(s.reason.value for s in self.skipped))


def partition(refs: Sequence[NamedResource], batch_size: int) -> list[list[NamedResource]]:
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    return [list(refs[i:i + batch_size]) for i in range(0, len(refs), batch_size)]


async def _load_one(client: ResilientPokeAPIClient, ref: NamedResource) -> EnrichResult:
    try:
        lookup: int | str = extract_id_from_url(ref.url)
    except ValueError:
        # fall back to the name; PokeAPI accepts both
        lookup = ref.name
    try:
        return await get_enriched_pokemon(client, lookup)
    except Exception as e:
        logger.error(
            f"Unexpected error enriching {ref.name}: {e}",
            exc_info=True, extra={"pokemon_id": str(lookup)},
        )
        return Skipped(key=str(lookup), reason=SkipReason.UNEXPECTED, detail=str(e))


async def load_all(
    client: ResilientPokeAPIClient,
    refs: Sequence[NamedResource],
    batch_size: int = 20,
) -> BatchLoadReport:
    """Load every ref, batch by batch."""
    report = BatchLoadReport()
    seen_ids: set[PokemonId] = set()

    for batch_index, batch in enumerate(partition(refs, batch_size)):
        results = await asyncio.gather(*(_load_one(client, ref) for ref in batch))

        for result in results:
            if isinstance(result, Enriched):
                if result.pokemon.id in seen_ids:
                    report.skipped.append(Skipped(
                        key=str(result.pokemon.id), reason=SkipReason.DUPLICATE,
                    ))
                    continue
                seen_ids.add(result.pokemon.id)
                report.entities.append(result.pokemon)
            else:
                logger.info(
                    f"Skipped Pokemon {result.key}: {result.detail or result.reason.value}",
                    extra={
                        "pokemon_id": result.key,
                        "skip_reason": result.reason.value,
                        "batch_index": batch_index,
                    },
                )
                report.skipped.append(result)

    if report.skipped:
        logger.warning(
            f"Loaded {len(report.entities)} of {len(refs)} Pokemon; skips: {report.skip_counts}",
            extra={"loaded": len(report.entities), "skipped": len(report.skipped)},
        )
    return report
