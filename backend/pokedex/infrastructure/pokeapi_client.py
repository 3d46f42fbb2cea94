"""Resilient PokeAPI Client - wraps httpx.AsyncClient with timeout, retry, validation and caching.

Invariants:
    - Every attempt has its own deadline (timeout_seconds); a timed-out attempt is retried
    - The deadline is applied both to httpx (connect/read/write/pool) and to the
      whole attempt, so no library default caps it
    - Timeouts and transport errors: up to max_retries retries, linear backoff
      (retry_base_delay_ms * (attempt + 1)); the last failure is re-raised as
      UpstreamNetworkError
    - Non-2xx responses are NOT retried: 404 -> ResourceNotFoundError,
      anything else -> UpstreamStatusError
    - Every payload is validated with its pydantic model; mismatch -> PayloadValidationError
    - Only validated payloads are cached; cache=None disables caching
    - asyncio.CancelledError is never caught

Design Decisions:
    - Wrapper over raw client: isolates retry logic from enrichment and batch loading
    - Linear (not exponential) backoff: PokeAPI failures are short blips and the
      retry budget is small
    - Sleep function injectable so tests run without real delays
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar
from urllib.parse import quote

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, ValidationError

from pokedex.config import Settings
from pokedex.core.errors import (
    ErrorContext,
    PayloadValidationError,
    ResourceNotFoundError,
    UpstreamNetworkError,
    UpstreamStatusError,
)
from pokedex.infrastructure.response_cache import response_cache
from pokedex.schemas.pokeapi import (
    EvolutionChain,
    Generation,
    NamedResource,
    PaginatedResponse,
    Pokemon,
    PokemonSpecies,
    TypeDetail,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ResilientPokeAPIClient:
    """Read-only PokeAPI access with retry, timeouts and error mapping."""

    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2",
        *,
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        retry_base_delay_ms: int = 1000,
        cache: TTLCache | None = None,
        user_agent: str = "pokedex-catalog/1.0",
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.retry_base_delay_ms = retry_base_delay_ms
        self.cache = cache
        self._http = http_client or httpx.AsyncClient(
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            timeout=httpx.Timeout(timeout_seconds),
        )
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None,
    ) -> "ResilientPokeAPIClient":
        return cls(
            settings.pokeapi_base_url,
            timeout_seconds=settings.fetch_timeout_seconds,
            max_retries=settings.max_retries,
            retry_base_delay_ms=settings.retry_base_delay_ms,
            cache=response_cache(settings.cache_ttl_seconds),
            user_agent=settings.user_agent,
            http_client=http_client,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- Transport -------------------------------------------------------------

    async def fetch(
        self,
        url: str,
        *,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
    ) -> httpx.Response:
        """GET url with a per-attempt deadline and bounded linear-backoff retry."""
        timeout = timeout_seconds if timeout_seconds is not None else self.timeout_seconds
        retries = max_retries if max_retries is not None else self.max_retries

        for attempt in range(retries + 1):
            try:
                response = await asyncio.wait_for(
                    self._http.get(url, timeout=timeout), timeout=timeout,
                )
                if attempt:
                    logger.info(
                        "PokeAPI request recovered after retry",
                        extra={"url": url, "attempt": attempt + 1},
                    )
                return response
            except (httpx.TransportError, asyncio.TimeoutError) as e:
                reason = "timeout" if isinstance(e, (asyncio.TimeoutError, httpx.TimeoutException)) else str(e)
                if attempt >= retries:
                    raise UpstreamNetworkError(
                        f"{reason} after {retries + 1} attempt(s)",
                        context=ErrorContext(url=url, attempts=attempt + 1),
                    ) from e
                delay = self._backoff(attempt)
                logger.warning(
                    f"Transient PokeAPI error, retry after {delay}ms: {reason}",
                    extra={"url": url, "attempt": attempt + 1},
                )
                await self._sleep(delay / 1000)

        # range(retries + 1) always runs at least once
        raise UpstreamNetworkError("max retries exceeded", context=ErrorContext(url=url))

    def _backoff(self, attempt: int) -> int:
        """Linear backoff in milliseconds: 1x, 2x, 3x the base delay."""
        return self.retry_base_delay_ms * (attempt + 1)

    async def get_json(self, url: str, model: type[M], *, resource: str, key: str) -> M:
        """Fetch url, validate into model, cache the validated result."""
        cache_key = f"{model.__name__}:{url}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        response = await self.fetch(url)
        if response.status_code == 404:
            raise ResourceNotFoundError(resource, key, context=ErrorContext(url=url))
        if not response.is_success:
            raise UpstreamStatusError(response.status_code, url)

        try:
            parsed = model.model_validate(response.json())
        except ValueError as e:
            # pydantic.ValidationError subclasses ValueError, as does JSONDecodeError
            detail = (
                f"{e.error_count()} field error(s)" if isinstance(e, ValidationError)
                else "body is not JSON"
            )
            raise PayloadValidationError(
                model.__name__, detail, context=ErrorContext(url=url, resource_id=key),
            ) from e

        if self.cache is not None:
            self.cache[cache_key] = parsed
        return parsed

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _key(id_or_name: int | str) -> str:
        return quote(str(id_or_name).strip().lower())

    # --- Endpoints -------------------------------------------------------------

    async def list_pokemon(self, limit: int) -> list[NamedResource]:
        page = await self.get_json(
            self._url(f"pokemon?limit={limit}"), PaginatedResponse,
            resource="Pokemon list", key=str(limit),
        )
        return page.results

    async def get_pokemon(self, id_or_name: int | str) -> Pokemon:
        key = self._key(id_or_name)
        return await self.get_json(
            self._url(f"pokemon/{key}"), Pokemon, resource="Pokemon", key=key,
        )

    async def get_species(self, id_or_name: int | str) -> PokemonSpecies:
        key = self._key(id_or_name)
        return await self.get_json(
            self._url(f"pokemon-species/{key}"), PokemonSpecies,
            resource="Pokemon species", key=key,
        )

    async def get_evolution_chain(self, url: str) -> EvolutionChain:
        return await self.get_json(
            url, EvolutionChain, resource="Evolution chain", key=url,
        )

    async def list_generations(self, limit: int) -> list[NamedResource]:
        page = await self.get_json(
            self._url(f"generation?limit={limit}"), PaginatedResponse,
            resource="Generation list", key=str(limit),
        )
        return page.results

    async def get_generation(self, url: str) -> Generation:
        return await self.get_json(url, Generation, resource="Generation", key=url)

    async def list_types(self, limit: int) -> list[NamedResource]:
        page = await self.get_json(
            self._url(f"type?limit={limit}"), PaginatedResponse,
            resource="Type list", key=str(limit),
        )
        return page.results

    async def get_type(self, url: str) -> TypeDetail:
        return await self.get_json(url, TypeDetail, resource="Type", key=url)

    async def ping(self) -> bool:
        """Readiness check: one un-retried request to the list endpoint."""
        try:
            response = await self.fetch(self._url("pokemon?limit=1"), max_retries=0)
        except UpstreamNetworkError:
            return False
        return response.is_success
