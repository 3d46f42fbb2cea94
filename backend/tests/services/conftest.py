"""Service test fixtures - fake PokeAPI seeded with three starters.

Invariants:
    - Every test gets a fresh FakePokeAPI (no state leaks between tests)
    - Seeded Pokemon: pikachu 25, charizard 6, greninja 658, each with its chain

Design Decisions:
    - Fake upstream at the httpx transport boundary: the real client, retry
      and validation code runs in every service test
"""

import pytest

from tests.services.fake_pokeapi import FakePokeAPI, seed_starters


@pytest.fixture
def fake():
    api = FakePokeAPI()
    seed_starters(api)
    return api
