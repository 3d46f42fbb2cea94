"""Pydantic Schemas - upstream payload validation and API response shapes.

Invariants:
    - Every upstream payload is validated here before it enters the system
    - Response models are plain data consumed by the presentation layer

Design Decisions:
    - Upstream models (pokeapi.py) kept apart from view models (pokemon.py):
      the first mirrors PokeAPI, the second is our contract
"""
