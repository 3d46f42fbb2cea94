"""Infrastructure Layer - upstream HTTP client, response cache, logging setup.

Invariants:
    - Infrastructure never imports from services/
    - All upstream calls wrapped with timeout/retry/error mapping
"""
