"""FastAPI dependencies - hand the per-process client and service to routes.

Invariants:
    - Both objects are created once in the lifespan and stored on app.state
"""

from fastapi import Request

from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient
from pokedex.services.catalog_service import CatalogService


def get_pokeapi_client(request: Request) -> ResilientPokeAPIClient:
    return request.app.state.pokeapi_client


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service
