"""Derived Statistics - totals and bar widths for the detail view.

Invariants:
    - total is the sum of base stats (0 when there are none)
    - percent = value / MAX_STAT_VALUE * 100, capped to 0..100, one decimal
"""

from collections.abc import Sequence
from dataclasses import dataclass

from pokedex.core.domain_types import MAX_STAT_VALUE
from pokedex.core.formatting import format_stat_name
from pokedex.schemas.pokemon import StatValue


@dataclass(frozen=True)
class StatBarData:
    name: str
    label: str
    value: int
    percent: float


@dataclass(frozen=True)
class StatsSummary:
    total: int
    bars: list[StatBarData]


def stat_percent(value: int, max_value: int = MAX_STAT_VALUE) -> float:
    percent = value / max_value * 100
    return round(min(100.0, max(0.0, percent)), 1)


def summarize_stats(stats: Sequence[StatValue]) -> StatsSummary:
    bars = [
        StatBarData(
            name=s.name,
            label=format_stat_name(s.name),
            value=s.value,
            percent=stat_percent(s.value),
        )
        for s in stats
    ]
    return StatsSummary(total=sum(s.value for s in stats), bars=bars)
