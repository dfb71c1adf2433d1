"""Display-currency inference by majority vote."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from .models import Purchase
from .normalizers import DEFAULT_CURRENCY


def infer_display_currency(purchases: Iterable[Purchase]) -> str:
    """Return the currency code used by the most purchases.

    Each purchase counts once regardless of amount. On a tie the code seen
    first wins. An empty input yields ``"USD"``. No conversion happens here;
    the result only decides how amounts are labelled.
    """

    counts = Counter(p.currency for p in purchases)
    if not counts:
        return DEFAULT_CURRENCY
    # Counter keeps first-seen order and max() returns the first maximum.
    return max(counts.items(), key=lambda kv: kv[1])[0]


__all__ = ["infer_display_currency"]
