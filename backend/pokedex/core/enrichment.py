"""Enrichment Join - builds EnrichedPokemon from upstream records, and the result type.

Invariants:
    - build_enriched_pokemon is PURE: all lookups happen before it is called
    - evolution_chain is never empty - the Pokemon's own name is the fallback
    - An enrichment attempt ends in exactly one of Enriched | Skipped

Design Decisions:
    - Explicit result type instead of None-to-skip: callers can count and log
      skip reasons (see services/batch_loader.py)
    - Skipped carries the lookup key so logs name the record that dropped out
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from pokedex.core.domain_types import GenerationId, PokemonId, SkipReason
from pokedex.core.evolution import extract_id_from_url, generation_name
from pokedex.schemas.pokeapi import Pokemon, PokemonSpecies
from pokedex.schemas.pokemon import EnrichedPokemon, StatValue, TypeRef


@dataclass(frozen=True)
class Enriched:
    pokemon: EnrichedPokemon


@dataclass(frozen=True)
class Skipped:
    key: str
    reason: SkipReason
    detail: str = ""


EnrichResult = Union[Enriched, Skipped]


def build_enriched_pokemon(
    pokemon: Pokemon,
    species: PokemonSpecies,
    evolution_names: Sequence[str] | None,
) -> EnrichedPokemon:
    """Join base record + species + evolution names into one view model."""
    chain = list(evolution_names or [])
    if not chain:
        chain = [pokemon.name]

    generation_id = GenerationId(extract_id_from_url(species.generation.url))

    return EnrichedPokemon(
        id=PokemonId(pokemon.id),
        name=pokemon.name,
        height=pokemon.height,
        weight=pokemon.weight,
        types=tuple(TypeRef(slot=t.slot, name=t.type.name) for t in pokemon.types),
        sprite=pokemon.sprites.preferred,
        generation_id=generation_id,
        generation_name=generation_name(generation_id),
        evolution_chain=tuple(chain),
        stats=tuple(StatValue(name=s.stat.name, value=s.base_stat) for s in pokemon.stats),
    )
