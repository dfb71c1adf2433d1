"""Highest and lowest priced purchases."""

from __future__ import annotations

from collections.abc import Iterable

from .fields import STATUS_ALIASES, resolve_field
from .models import Purchase, Ranking

CANCELLED_STATUS = "Cancelled"
DEFAULT_RANKING_SIZE = 5


def is_cancelled(p: Purchase) -> bool:
    return resolve_field(p.raw, STATUS_ALIASES) == CANCELLED_STATUS


def top_purchases(purchases: Iterable[Purchase], n: int = DEFAULT_RANKING_SIZE) -> Ranking:
    """Return up to ``n`` non-cancelled purchases, largest ``total`` first.

    Equal totals keep their input order. ``n <= 0`` gives an empty ranking.
    """

    if n <= 0:
        return ()
    kept = [p for p in purchases if not is_cancelled(p)]
    return tuple(sorted(kept, key=lambda p: p.total, reverse=True)[:n])


def bottom_purchases(purchases: Iterable[Purchase], n: int = DEFAULT_RANKING_SIZE) -> Ranking:
    """Return up to ``n`` non-cancelled purchases, smallest ``total`` first.

    Purchases with ``total <= 0`` are left out: free items and rows whose
    amount failed to parse would otherwise fill the whole ranking.
    """

    if n <= 0:
        return ()
    kept = [p for p in purchases if not is_cancelled(p) and p.total > 0]
    return tuple(sorted(kept, key=lambda p: p.total)[:n])


__all__ = [
    "CANCELLED_STATUS",
    "DEFAULT_RANKING_SIZE",
    "bottom_purchases",
    "is_cancelled",
    "top_purchases",
]
