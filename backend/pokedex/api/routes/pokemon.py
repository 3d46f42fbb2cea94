"""Pokemon Routes - paginated, filterable list and the detail view.

Invariants:
    - Query strings are validated by FastAPI/Pydantic before reaching the handler
    - Pages outside 1..total_pages are answered with page 1
    - The list response reports how many entities were skipped upstream
    - Unknown Pokemon -> 404 envelope (ResourceNotFoundError)

Design Decisions:
    - Filtered listings are paged through a CatalogState built per request:
      the same state container a long-lived client session would hold
"""

import logging

from fastapi import APIRouter, Depends, Query

from pokedex.api.dependencies import get_catalog_service
from pokedex.config import get_settings
from pokedex.core.catalog_state import CatalogState
from pokedex.core.formatting import (
    format_height, format_pokemon_name, format_pokemon_number, format_weight,
)
from pokedex.core.pagination import page_numbers, showing_range, total_pages_for
from pokedex.schemas.pokemon import (
    PokemonDetailResponse,
    PokemonFilters,
    PokemonListResponse,
    StatBar,
    StatsSummaryResponse,
)
from pokedex.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/pokemon", tags=["pokemon"])


@router.get("", response_model=PokemonListResponse)
async def list_pokemon(
    type_filter: str | None = Query(None, alias="type", max_length=200),
    generation: str | None = Query(None, max_length=10),
    search: str | None = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    service: CatalogService = Depends(get_catalog_service),
):
    """List Pokemon, optionally filtered by type (comma = AND), generation and name."""
    page_size = get_settings().page_size
    filters = PokemonFilters(type=type_filter, generation=generation, search=search)
    listing = await service.list_pokemon(filters, page, page_size)

    if listing.paginated:
        total_pages = total_pages_for(listing.total_filtered, page_size)
        if page > total_pages > 0:
            page = 1
            listing = await service.list_pokemon(filters, page, page_size)
        first, last = showing_range(page, page_size, listing.total_filtered)
        return PokemonListResponse(
            pokemon=listing.pokemon,
            page=page,
            total_pages=total_pages,
            total=listing.total,
            total_filtered=listing.total_filtered,
            page_numbers=page_numbers(page, total_pages),
            showing_from=first,
            showing_to=last,
            skipped=listing.skipped,
        )

    state = CatalogState(dataset=listing.pokemon, page_size=page_size)
    state.set_filters(filters)
    state.go_to_page(page)
    view = state.view
    return PokemonListResponse(
        pokemon=view.items,
        page=view.current_page,
        total_pages=view.total_pages,
        total=listing.total,
        total_filtered=view.total_filtered,
        page_numbers=view.page_numbers,
        showing_from=view.showing_from,
        showing_to=view.showing_to,
        skipped=listing.skipped,
    )


@router.get("/{id_or_name}", response_model=PokemonDetailResponse)
async def get_pokemon(
    id_or_name: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Detail view: enriched Pokemon, stat bars and evolution chain members."""
    detail = await service.get_detail(id_or_name)
    pokemon = detail.pokemon
    return PokemonDetailResponse(
        pokemon=pokemon,
        display_name=format_pokemon_name(pokemon.name),
        number=format_pokemon_number(pokemon.id),
        height=format_height(pokemon.height),
        weight=format_weight(pokemon.weight),
        stats=StatsSummaryResponse(
            total=detail.stats.total,
            bars=[
                StatBar(name=b.name, label=b.label, value=b.value, percent=b.percent)
                for b in detail.stats.bars
            ],
        ),
        evolutions=detail.evolutions,
    )
