"""URL, Generation and Evolution Helpers - pure functions over PokeAPI shapes.

Invariants:
    - extract_id_from_url reads the last non-empty path segment
    - extract_evolution_names walks the chain depth-first, pre-order
    - generation_name uses roman numerals I..IX, falling back to the number

Design Decisions:
    - Iterative traversal with an explicit stack: chain depth is never a
      recursion-limit concern
"""

from pokedex.core.domain_types import ROMAN_NUMERALS
from pokedex.schemas.pokeapi import ChainLink, EvolutionChain


def extract_id_from_url(url: str) -> int:
    """'https://pokeapi.co/api/v2/pokemon/25/' -> 25.

    Raises ValueError when the last segment is not an integer.
    """
    parts = [p for p in url.split("/") if p]
    if not parts:
        raise ValueError(f"No path segments in URL: {url!r}")
    return int(parts[-1])


def roman_numeral(number: int) -> str:
    return ROMAN_NUMERALS.get(number, str(number))


def generation_name(generation: int | str) -> str:
    """Display name for a generation id or generation URL."""
    gen_id = generation if isinstance(generation, int) else extract_id_from_url(generation)
    return f"Generation {roman_numeral(gen_id)}"


def extract_evolution_names(chain: EvolutionChain | ChainLink) -> list[str]:
    """Flatten an evolution chain into species names, base form first."""
    root = chain.chain if isinstance(chain, EvolutionChain) else chain
    names: list[str] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.species.name:
            names.append(node.species.name)
        # reversed so siblings come out in upstream order
        stack.extend(reversed(node.evolves_to))
    return names
