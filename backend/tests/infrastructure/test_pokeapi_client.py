"""Resilient PokeAPI client - retry, timeout, status mapping, validation and caching.

Tests cover:
    - Transport errors retried with linear backoff, then UpstreamNetworkError
    - Per-attempt deadline enforced and retried
    - 404 -> ResourceNotFoundError, 5xx -> UpstreamStatusError (no retry)
    - Malformed payload -> PayloadValidationError
    - Validated payloads served from cache on the second call
"""

import asyncio

import httpx
import pytest
from cachetools import TTLCache

from pokedex.core.errors import (
    PayloadValidationError,
    ResourceNotFoundError,
    UpstreamNetworkError,
    UpstreamStatusError,
)
from pokedex.infrastructure.pokeapi_client import ResilientPokeAPIClient

from tests.services.fake_pokeapi import BASE_URL, FakePokeAPI, SleepRecorder, make_client, seed_starters


@pytest.fixture
def fake():
    api = FakePokeAPI()
    seed_starters(api)
    return api


async def test_get_pokemon_by_id_and_name(fake):
    client = make_client(fake)
    assert (await client.get_pokemon(25)).name == "pikachu"
    assert (await client.get_pokemon("Pikachu")).id == 25
    await client.aclose()


async def test_transport_error_is_retried_then_succeeds(fake):
    fake.fail_transport("pokemon/25", times=2)
    sleep = SleepRecorder()
    client = make_client(fake, max_retries=2, sleep=sleep)

    pokemon = await client.get_pokemon(25)

    assert pokemon.name == "pikachu"
    assert fake.calls.count("pokemon/25") == 3
    # linear backoff: 1x then 2x the base delay
    assert sleep.delays == [1.0, 2.0]


async def test_retries_exhausted_raises_network_error(fake):
    fake.fail_transport("pokemon/25", times=5)
    sleep = SleepRecorder()
    client = make_client(fake, max_retries=2, sleep=sleep)

    with pytest.raises(UpstreamNetworkError) as exc_info:
        await client.get_pokemon(25)

    assert fake.calls.count("pokemon/25") == 3
    assert exc_info.value.context.attempts == 3
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert len(sleep.delays) == 2


async def test_zero_retries_means_single_attempt(fake):
    fake.fail_transport("pokemon/25", times=1)
    client = make_client(fake, max_retries=0)
    with pytest.raises(UpstreamNetworkError):
        await client.get_pokemon(25)
    assert fake.calls.count("pokemon/25") == 1


async def test_slow_attempt_hits_deadline_and_is_retried():
    attempts = []

    async def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request.url.path)
        if len(attempts) == 1:
            await asyncio.sleep(5)
        return httpx.Response(200, json={"count": 0, "next": None, "previous": None, "results": []})

    client = ResilientPokeAPIClient(
        BASE_URL,
        timeout_seconds=0.05,
        max_retries=1,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=SleepRecorder(),
    )

    assert await client.list_pokemon(10) == []
    assert len(attempts) == 2


async def test_httpx_timeout_counts_as_transient():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        raise httpx.ReadTimeout("read timed out", request=request)

    client = ResilientPokeAPIClient(
        BASE_URL,
        max_retries=1,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        sleep=SleepRecorder(),
    )
    with pytest.raises(UpstreamNetworkError) as exc_info:
        await client.get_pokemon(1)
    assert "timeout" in exc_info.value.message
    assert len(calls) == 2


async def test_not_found_maps_to_resource_not_found(fake):
    client = make_client(fake)
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await client.get_pokemon("missingno")
    assert exc_info.value.http_status == 404
    assert fake.calls.count("pokemon/missingno") == 1


async def test_server_error_is_not_retried(fake):
    fake.fail("pokemon/25", 500)
    client = make_client(fake, max_retries=2)
    with pytest.raises(UpstreamStatusError) as exc_info:
        await client.get_pokemon(25)
    assert exc_info.value.status_code == 500
    assert fake.calls.count("pokemon/25") == 1


async def test_malformed_payload_raises_validation_error(fake):
    fake.malformed.add("pokemon/25")
    client = make_client(fake)
    with pytest.raises(PayloadValidationError) as exc_info:
        await client.get_pokemon(25)
    assert exc_info.value.model_name == "Pokemon"


async def test_non_json_body_raises_validation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    client = ResilientPokeAPIClient(
        BASE_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(PayloadValidationError):
        await client.get_pokemon(1)


async def test_validated_payloads_are_cached(fake):
    client = make_client(fake, cache=TTLCache(maxsize=100, ttl=60))
    await client.get_pokemon(25)
    await client.get_pokemon(25)
    assert fake.calls.count("pokemon/25") == 1


async def test_invalid_payloads_are_not_cached(fake):
    fake.malformed.add("pokemon/25")
    client = make_client(fake, cache=TTLCache(maxsize=100, ttl=60))
    with pytest.raises(PayloadValidationError):
        await client.get_pokemon(25)
    fake.malformed.clear()
    assert (await client.get_pokemon(25)).name == "pikachu"


async def test_list_endpoints_respect_limit(fake):
    client = make_client(fake)
    refs = await client.list_pokemon(2)
    assert [r.name for r in refs] == ["pikachu", "charizard"]


async def test_ping_reports_upstream_health(fake):
    client = make_client(fake)
    assert await client.ping() is True
    fake.fail_transport("pokemon", times=1)
    assert await client.ping() is False


async def test_cancellation_is_not_swallowed():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    client = ResilientPokeAPIClient(
        BASE_URL,
        timeout_seconds=30,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    task = asyncio.create_task(client.get_pokemon(1))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
