"""API test fixtures - FastAPI app over a fake PokeAPI, driven through httpx.

Invariants:
    - app.state pre-seeded before the first request; no real network
    - PAGE_SIZE forced to 2 so three seeded Pokemon span two pages
    - Settings cache cleared around every test

Design Decisions:
    - ASGITransport does not run the lifespan; pre-seeding app.state is the
      same path the lifespan takes when state already exists
"""

import pytest
from cachetools import TTLCache
from httpx import ASGITransport, AsyncClient

from pokedex.config import get_settings
from pokedex.main import create_app
from pokedex.services.catalog_service import CatalogService

from tests.services.fake_pokeapi import FakePokeAPI, make_client, seed_starters


@pytest.fixture
def fake():
    api = FakePokeAPI()
    seed_starters(api)
    return api


@pytest.fixture
async def client(fake, monkeypatch):
    """httpx client bound to a fresh app instance."""
    monkeypatch.setenv("PAGE_SIZE", "2")
    get_settings.cache_clear()

    app = create_app()
    pokeapi = make_client(fake, max_retries=0)
    app.state.pokeapi_client = pokeapi
    app.state.catalog_service = CatalogService(
        pokeapi, dataset_cache=TTLCache(maxsize=100, ttl=60),
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac

    await pokeapi.aclose()
    get_settings.cache_clear()
