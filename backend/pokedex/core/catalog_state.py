"""Catalog State - single state container for browsing a loaded dataset.

Invariants:
    - current_filters and current_page change ONLY through the action methods
    - Any filter change resets current_page to 1
    - view is recomputed only when (dataset version, filters, page) changes
    - A current_page beyond the filtered page count is clamped back to 1

Design Decisions:
    - Explicit actions + memoized derived views instead of URL-change events:
      no global event bus, no hidden listeners
    - Mutable dataclass like the other per-session state holders; one writer
      per instance, so no locking
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from pokedex.core.domain_types import FilterField
from pokedex.core.filters import apply_filters, has_active_filters
from pokedex.core.pagination import (
    clamp_page, page_numbers, paginate, showing_range, total_pages_for,
)
from pokedex.schemas.pokemon import EnrichedPokemon, PokemonFilters


@dataclass(frozen=True)
class CatalogView:
    """Derived, read-only snapshot of what the list page shows."""
    items: list[EnrichedPokemon]
    total_filtered: int
    total_pages: int
    current_page: int
    page_numbers: list[int | str]
    showing_from: int
    showing_to: int


@dataclass
class CatalogState:
    """Per-session browsing state over an in-memory dataset - no IO."""

    dataset: list[EnrichedPokemon] = field(default_factory=list)
    page_size: int = 50
    current_filters: PokemonFilters = field(default_factory=PokemonFilters)
    current_page: int = 1

    # Memoization (bumped on every dataset replacement)
    _dataset_version: int = field(default=0, repr=False)
    _filtered_key: tuple | None = field(default=None, repr=False)
    _filtered: list[EnrichedPokemon] = field(default_factory=list, repr=False)
    _view_key: tuple | None = field(default=None, repr=False)
    _view: CatalogView | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    # --- Actions ---------------------------------------------------------------

    def set_filter(self, filter_field: FilterField | str, value: str | None) -> None:
        """Set one criterion (empty value clears it) and go back to page 1."""
        key = FilterField(filter_field).value
        updated = self.current_filters.model_dump()
        updated[key] = value
        self.current_filters = PokemonFilters(**updated)
        self.current_page = 1

    def set_filters(self, filters: PokemonFilters) -> None:
        if filters != self.current_filters:
            self.current_filters = filters
            self.current_page = 1

    def set_search(self, query: str | None) -> None:
        self.set_filter(FilterField.SEARCH, query)

    def clear_filters(self) -> None:
        self.current_filters = PokemonFilters()
        self.current_page = 1

    def go_to_page(self, page: int) -> None:
        self.current_page = clamp_page(page, self.total_pages)

    def next_page(self) -> None:
        if self.current_page < self.total_pages:
            self.current_page += 1

    def previous_page(self) -> None:
        if self.current_page > 1:
            self.current_page -= 1

    def replace_dataset(self, dataset: Sequence[EnrichedPokemon]) -> None:
        self.dataset = list(dataset)
        self._dataset_version += 1
        self.current_page = clamp_page(self.current_page, self.total_pages)

    # --- Derived views ---------------------------------------------------------

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self.current_filters)

    @property
    def filtered(self) -> list[EnrichedPokemon]:
        key = (self._dataset_version, id(self.dataset), len(self.dataset), self.current_filters)
        if key != self._filtered_key:
            self._filtered = apply_filters(self.dataset, self.current_filters)
            self._filtered_key = key
        return self._filtered

    @property
    def total_pages(self) -> int:
        return total_pages_for(len(self.filtered), self.page_size)

    @property
    def view(self) -> CatalogView:
        filtered = self.filtered
        self.current_page = clamp_page(self.current_page, self.total_pages)
        key = (self._filtered_key, self.current_page, self.page_size)
        if key != self._view_key or self._view is None:
            page = paginate(filtered, self.current_page, self.page_size)
            first, last = showing_range(page.page, self.page_size, len(filtered))
            self._view = CatalogView(
                items=page.items,
                total_filtered=len(filtered),
                total_pages=page.total_pages,
                current_page=page.page,
                page_numbers=page_numbers(page.page, page.total_pages),
                showing_from=first,
                showing_to=last,
            )
            self._view_key = key
        return self._view
