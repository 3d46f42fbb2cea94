"""Pure enrichment join - build_enriched_pokemon from validated upstream records."""

import pytest
from pydantic import ValidationError

from pokedex.core.enrichment import build_enriched_pokemon
from pokedex.schemas.pokeapi import Pokemon, PokemonSpecies
from pokedex.schemas.pokemon import EnrichedPokemon

from tests.services.fake_pokeapi import pokemon_payload, species_payload


def _records(artwork="default", stats=None):
    pokemon = Pokemon.model_validate(
        pokemon_payload(6, "charizard", ["fire", "flying"], artwork=artwork, stats=stats),
    )
    species = PokemonSpecies.model_validate(species_payload(6, "charizard", 1, 2))
    return pokemon, species


def test_join_copies_base_fields_and_derives_generation():
    pokemon, species = _records()
    enriched = build_enriched_pokemon(pokemon, species, ["charmander", "charmeleon", "charizard"])
    assert enriched.id == 6
    assert enriched.generation_id == 1
    assert enriched.generation_name == "Generation I"
    assert [(t.slot, t.name) for t in enriched.types] == [(1, "fire"), (2, "flying")]
    assert enriched.evolution_chain == ("charmander", "charmeleon", "charizard")


def test_join_prefers_official_artwork():
    pokemon, species = _records()
    assert build_enriched_pokemon(pokemon, species, None).sprite == "https://img.test/artwork/6.png"


def test_join_falls_back_to_front_sprite():
    pokemon, species = _records(artwork=None)
    assert build_enriched_pokemon(pokemon, species, None).sprite == "https://img.test/front/6.png"


def test_join_falls_back_to_own_name_when_chain_empty():
    pokemon, species = _records()
    assert build_enriched_pokemon(pokemon, species, []).evolution_chain == ("charizard",)


def test_join_maps_stats():
    pokemon, species = _records(stats={"hp": 78, "special-attack": 109})
    enriched = build_enriched_pokemon(pokemon, species, None)
    assert [(s.name, s.value) for s in enriched.stats] == [("hp", 78), ("special-attack", 109)]


def test_enriched_pokemon_requires_non_empty_chain():
    with pytest.raises(ValidationError):
        EnrichedPokemon(
            id=1, name="x", height=1, weight=1, types=[],
            generation_id=1, generation_name="Generation I", evolution_chain=[],
        )
