"""Filter Option Routes - generations and types offered by the list filters."""

from fastapi import APIRouter, Depends

from pokedex.api.dependencies import get_catalog_service
from pokedex.core.evolution import generation_name
from pokedex.core.formatting import capitalize
from pokedex.schemas.pokemon import GenerationOption, TypeOption
from pokedex.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/v1", tags=["filters"])


@router.get("/generations", response_model=list[GenerationOption])
async def list_generations(service: CatalogService = Depends(get_catalog_service)):
    generations = await service.list_generations()
    return [
        GenerationOption(
            id=g.id,
            name=g.name,
            label=generation_name(g.id),
            species_count=len(g.pokemon_species),
        )
        for g in generations
    ]


@router.get("/types", response_model=list[TypeOption])
async def list_types(service: CatalogService = Depends(get_catalog_service)):
    types = await service.list_types()
    return [
        TypeOption(
            id=t.id,
            name=t.name,
            label=capitalize(t.name),
            pokemon_count=len(t.pokemon),
        )
        for t in types
    ]
