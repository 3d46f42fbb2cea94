"""Filter Engine - narrows a collection of EnrichedPokemon by type, generation and name.

Invariants:
    - Every filter is a no-op on an empty criterion (returns the input unchanged)
    - Type filter: comma list is AND-combined and order-independent
    - Generation filter: exact match on the integer parsed from the criterion
    - Search filter: trimmed, case-insensitive substring on the name or any
      evolution chain name
    - apply_filters runs type -> generation -> search; input order is preserved

Design Decisions:
    - Pure functions over a filter class: each stage is testable alone and
      apply_filters is their composition
    - A non-numeric generation criterion matches nothing rather than raising:
      query strings come straight from users
"""

from collections.abc import Sequence

from pokedex.schemas.pokemon import EnrichedPokemon, PokemonFilters


def parse_type_criterion(type_criterion: str | None) -> list[str]:
    """'fire, flying,' -> ['fire', 'flying']. Lowercased, blanks dropped."""
    if not type_criterion:
        return []
    return [t.strip().lower() for t in type_criterion.split(",") if t.strip()]


def filter_by_type(
    pokemon: Sequence[EnrichedPokemon], type_criterion: str | None,
) -> list[EnrichedPokemon]:
    """Keep Pokemon that carry every listed type."""
    wanted = parse_type_criterion(type_criterion)
    if not wanted:
        return list(pokemon)
    return [p for p in pokemon if set(wanted).issubset(p.type_names)]


def filter_by_generation(
    pokemon: Sequence[EnrichedPokemon], generation: str | None,
) -> list[EnrichedPokemon]:
    if not generation or not generation.strip():
        return list(pokemon)
    try:
        gen_id = int(generation.strip())
    except ValueError:
        return []
    return [p for p in pokemon if p.generation_id == gen_id]


def filter_by_search(
    pokemon: Sequence[EnrichedPokemon], search: str | None,
) -> list[EnrichedPokemon]:
    """Match the Pokemon's own name or any member of its evolution chain."""
    if not search:
        return list(pokemon)
    needle = search.strip().lower()
    if not needle:
        return list(pokemon)
    return [
        p for p in pokemon
        if needle in p.name.lower()
        or any(needle in evo.lower() for evo in p.evolution_chain)
    ]


def has_active_filters(filters: PokemonFilters) -> bool:
    return bool(filters.type or filters.generation or filters.search)


def apply_filters(
    pokemon: Sequence[EnrichedPokemon], filters: PokemonFilters | None = None,
) -> list[EnrichedPokemon]:
    """Apply all criteria in order: type, generation, search."""
    filtered = list(pokemon)
    if filters is None:
        return filtered

    if filters.type:
        filtered = filter_by_type(filtered, filters.type)

    if filters.generation:
        filtered = filter_by_generation(filtered, filters.generation)

    if filters.search:
        filtered = filter_by_search(filtered, filters.search)

    return filtered
