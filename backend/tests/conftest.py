"""Root conftest - shared test configuration."""

import os

# Ensure tests never reach the real PokeAPI or wait on real backoff
os.environ.setdefault("POKEAPI_BASE_URL", "https://pokeapi.test/api/v2")
os.environ.setdefault("RETRY_BASE_DELAY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
