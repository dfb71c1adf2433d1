"""Data models and type aliases for ``purchase_history``.

Raw rows stay opaque string mappings; only the handful of fields the views
need are promoted onto :class:`Purchase`. Everything else (order status,
payment instrument, shipping details, ...) remains reachable through
``Purchase.raw``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------

RawRecord: TypeAlias = Mapping[str, str]
"""One row of a purchase-history export keyed by its original header strings.

Header spelling varies between exporters (``OrderDate`` vs ``Order Date``);
see :mod:`purchase_history.fields` for how logical fields are looked up.
"""


# ---------------------------------------------------------------------------
# Canonical entity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Purchase:
    """A normalized purchase.

    ``month`` is 1-12 and ``weekday`` counts from Sunday (0) to Saturday (6).
    ``raw`` points back at the source row and is never modified.
    """

    total: Decimal
    date: datetime
    product: str
    currency: str
    year: int
    month: int
    weekday: int
    raw: RawRecord


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

SeriesKey: TypeAlias = int | str
AggregateSeries: TypeAlias = tuple[tuple[SeriesKey, Decimal | int], ...]
"""Ordered ``(key, summed value)`` pairs, ascending by key with no repeats."""

Ranking: TypeAlias = tuple[Purchase, ...]


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of a successful load: the display currency and the purchases."""

    currency: str
    purchases: tuple[Purchase, ...]


@dataclass(frozen=True, slots=True)
class Views:
    """Every aggregate and ranking derived from one set of purchases."""

    year_series: AggregateSeries
    month_series: AggregateSeries
    weekday_series: AggregateSeries
    payment_type_series: AggregateSeries
    top_ranking: Ranking
    bottom_ranking: Ranking

    @property
    def is_empty(self) -> bool:
        return not (self.year_series or self.top_ranking or self.bottom_ranking)


def ranking_rows(ranking: Sequence[Purchase]) -> list[tuple[str, datetime, Decimal]]:
    """Return ``(product, date, amount)`` triples for tabular display."""

    return [(p.product, p.date, p.total) for p in ranking]


__all__ = [
    "AggregateSeries",
    "LoadResult",
    "Purchase",
    "Ranking",
    "RawRecord",
    "SeriesKey",
    "Views",
    "ranking_rows",
]
