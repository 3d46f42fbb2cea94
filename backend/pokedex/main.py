"""Pokedex API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PokedexError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One PokeAPI client per process, created in the lifespan and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests pre-seed app.state with a client backed by a
      fake transport; the lifespan leaves pre-seeded state alone
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokedex.api.error_handlers import register_error_handlers
from pokedex.api.routes import filter_options, health, pokemon
from pokedex.config import get_settings
from pokedex.infrastructure.observability import setup_logging
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient
from pokedex.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    owns_client = not hasattr(app.state, "pokeapi_client")
    if owns_client:
        app.state.pokeapi_client = ResilientPokeAPIClient.from_settings(settings)
    if not hasattr(app.state, "catalog_service"):
        app.state.catalog_service = CatalogService.from_settings(
            app.state.pokeapi_client, settings,
        )
    logger.info("Pokedex API started")
    yield
    if owns_client:
        await app.state.pokeapi_client.aclose()
    logger.info("Pokedex API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Pokedex API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Routes - explicit registration
    app.include_router(health.router)
    app.include_router(pokemon.router)
    app.include_router(filter_options.router)

    register_error_handlers(app)
    return app


app = create_app()
