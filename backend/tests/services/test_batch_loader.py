"""Batch Loader - ordered, bounded, failure-tolerant bulk enrichment."""

import asyncio

import pytest

from pokedex.core.domain_types import SkipReason
from pokedex.schemas.pokeapi import NamedResource
from pokedex.services import batch_loader
from pokedex.services.batch_loader import load_all, partition

from tests.services.fake_pokeapi import BASE_URL, FakePokeAPI, make_client, ref


def _refs(fake: FakePokeAPI) -> list[NamedResource]:
    return [NamedResource.model_validate(r) for r in fake.pokemon_order]


def test_partition_keeps_order_and_remainder():
    refs = [NamedResource(name=str(i), url=f"{BASE_URL}/pokemon/{i}/") for i in range(5)]
    batches = partition(refs, 2)
    assert [[r.name for r in b] for b in batches] == [["0", "1"], ["2", "3"], ["4"]]


def test_partition_rejects_non_positive_size():
    with pytest.raises(ValueError):
        partition([], 0)


async def test_loads_every_ref_in_input_order(fake):
    report = await load_all(make_client(fake), _refs(fake), batch_size=2)
    assert [p.name for p in report.entities] == ["pikachu", "charizard", "greninja"]
    assert report.skipped == []


async def test_one_failure_does_not_abort_batch(fake):
    fake.fail("pokemon/6", 500)
    report = await load_all(make_client(fake), _refs(fake), batch_size=20)

    assert [p.name for p in report.entities] == ["pikachu", "greninja"]
    assert len(report.skipped) == 1
    assert report.skipped[0].key == "6"
    assert report.skip_counts == {SkipReason.UPSTREAM_STATUS.value: 1}


async def test_skips_are_counted_per_reason(fake):
    fake.remove("pokemon-species/25")
    fake.fail_transport("pokemon/658", times=10)
    report = await load_all(make_client(fake, max_retries=0), _refs(fake))

    assert [p.name for p in report.entities] == ["charizard"]
    assert report.skip_counts == {
        SkipReason.SPECIES_UNAVAILABLE.value: 1,
        SkipReason.NETWORK.value: 1,
    }


async def test_duplicate_refs_yield_one_entity(fake):
    refs = _refs(fake) + [NamedResource.model_validate(ref("pokemon", 25, "pikachu"))]
    report = await load_all(make_client(fake), refs, batch_size=2)
    assert [p.id for p in report.entities] == [25, 6, 658]
    assert [s.reason for s in report.skipped] == [SkipReason.DUPLICATE]


async def test_ref_without_numeric_url_uses_name(fake):
    refs = [NamedResource(name="pikachu", url=f"{BASE_URL}/pokemon/pikachu/")]
    report = await load_all(make_client(fake), refs)
    assert [p.id for p in report.entities] == [25]
    assert "pokemon/pikachu" in fake.calls


async def test_empty_refs_produce_empty_report(fake):
    report = await load_all(make_client(fake), [])
    assert report.entities == []
    assert fake.calls == []


async def test_unexpected_error_becomes_skip(fake, monkeypatch):
    async def boom(client, lookup):
        raise RuntimeError("boom")

    monkeypatch.setattr(batch_loader, "get_enriched_pokemon", boom)
    report = await load_all(make_client(fake), _refs(fake))
    assert report.entities == []
    assert report.skip_counts == {SkipReason.UNEXPECTED.value: 3}


async def test_batches_run_sequentially(fake, monkeypatch):
    in_flight = 0
    peak = 0
    real = batch_loader.get_enriched_pokemon

    async def tracking(client, lookup):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0)
        try:
            return await real(client, lookup)
        finally:
            in_flight -= 1

    monkeypatch.setattr(batch_loader, "get_enriched_pokemon", tracking)
    report = await load_all(make_client(fake), _refs(fake), batch_size=2)
    assert len(report.entities) == 3
    assert peak <= 2
