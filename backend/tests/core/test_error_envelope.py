"""Typed errors - status codes and the JSON envelope they render to."""

from pokedex.config import Settings
from pokedex.core.errors import (
    ErrorContext,
    PayloadValidationError,
    ResourceNotFoundError,
    UpstreamNetworkError,
    UpstreamStatusError,
)


def test_not_found_envelope():
    error = ResourceNotFoundError("Pokemon", "missingno")
    body = error.to_response()["error"]
    assert error.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["severity"] == "warning"
    assert body["context"]["resource_id"] == "missingno"


def test_network_error_records_attempts():
    error = UpstreamNetworkError("timeout after 3 attempt(s)", context=ErrorContext(attempts=3))
    assert error.http_status == 503
    assert error.message.startswith("PokeAPI unreachable")
    assert error.to_response()["error"]["context"]["attempts"] == 3


def test_status_and_payload_errors_are_bad_gateway():
    assert UpstreamStatusError(500, "https://x/pokemon/1").http_status == 502
    assert PayloadValidationError("Pokemon", "2 field error(s)").http_status == 502


def test_settings_strip_base_url_slash():
    settings = Settings(pokeapi_base_url="https://pokeapi.co/api/v2/")
    assert settings.pokeapi_base_url == "https://pokeapi.co/api/v2"
    assert settings.max_retries == 2
    assert settings.page_size == 50
