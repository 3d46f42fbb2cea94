"""Services Layer - enrichment, batch loading and catalog assembly.

Invariants:
    - Services talk to PokeAPI only through ResilientPokeAPIClient
    - Per-item failures become Skipped results; they never abort a batch
"""
