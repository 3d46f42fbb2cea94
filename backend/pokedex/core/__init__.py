"""Core Layer - pure catalog logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic (CatalogState mutates only itself)

Design Decisions:
    - Functional core separated from imperative shell: filters, pagination and
      formatting are testable without fakes
"""
