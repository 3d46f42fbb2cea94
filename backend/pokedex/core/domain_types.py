"""Domain Types - rich types and constants shared across the catalog.

Invariants:
    - PokemonId and GenerationId wrap ints - never mix them with page numbers
    - All valid skip reasons and filter fields encoded as Enums - no raw string matching
    - ROMAN_NUMERALS covers generations I..IX; anything else renders as the number

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PokemonId = NewType("PokemonId", int)
GenerationId = NewType("GenerationId", int)


# ─── Enums ───────────────────────────────────────────────────────

class SkipReason(str, Enum):
    """Why an entity was left out of a loaded collection."""
    NOT_FOUND = "not_found"
    NETWORK = "network"
    UPSTREAM_STATUS = "upstream_status"
    INVALID_PAYLOAD = "invalid_payload"
    SPECIES_UNAVAILABLE = "species_unavailable"
    DUPLICATE = "duplicate"
    UNEXPECTED = "unexpected"


class FilterField(str, Enum):
    """The three filter criteria, in the order they are applied."""
    TYPE = "type"
    GENERATION = "generation"
    SEARCH = "search"


# ─── Constants ───────────────────────────────────────────────────

ROMAN_NUMERALS: dict[int, str] = {
    1: "I",
    2: "II",
    3: "III",
    4: "IV",
    5: "V",
    6: "VI",
    7: "VII",
    8: "VIII",
    9: "IX",
}

# Highest base stat in the games; used to scale stat bars
MAX_STAT_VALUE = 255

# Pseudo-types PokeAPI lists but no Pokemon carries
EXCLUDED_TYPES = frozenset({"unknown", "shadow"})

# Page-number strip width (pages shown around the ellipses)
PAGE_STRIP_SIZE = 5

ELLIPSIS = "..."
