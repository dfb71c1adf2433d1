"""Group-and-sum over purchases with deterministic key ordering."""

from __future__ import annotations

import locale
from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TypeAlias
from numbers import Number

from .models import AggregateSeries, Purchase, SeriesKey

KeyFn: TypeAlias = Callable[[Purchase], SeriesKey | None]
ValueFn: TypeAlias = Callable[[Purchase], Decimal | int]


def _count(_: Purchase) -> int:
    return 1


def _is_numeric(key: object) -> bool:
    return isinstance(key, Number) and not isinstance(key, bool)


def collation_key(key: SeriesKey) -> tuple[str, str]:
    """Sort key for string labels: case-insensitive first, then the locale order.

    Uses the active ``LC_COLLATE``; the CLI sets it from the environment. Under
    the C locale the case fold still keeps ``"gift card"`` ahead of ``"Visa"``.
    """

    s = str(key)
    return locale.strxfrm(s.casefold()), locale.strxfrm(s)


def _sort_keys(keys: Iterable[SeriesKey]) -> list[SeriesKey]:
    keys = list(keys)
    if all(_is_numeric(k) for k in keys):
        return sorted(keys)
    return sorted(keys, key=collation_key)


def aggregate(
    purchases: Iterable[Purchase],
    key_fn: KeyFn,
    value_fn: ValueFn | None = None,
) -> AggregateSeries:
    """Sum ``value_fn`` per ``key_fn`` and return pairs sorted by key.

    - Purchases whose key is ``None`` are skipped, not grouped under a
      placeholder.
    - Without ``value_fn`` each purchase contributes ``1`` (a count).
    - Keys sort numerically when all are numbers, otherwise by locale-aware
      string comparison.
    - A key seen once is always present, even when its sum is zero or negative.
    """

    value_fn = value_fn or _count
    sums: dict[SeriesKey, Decimal | int] = {}
    for p in purchases:
        key = key_fn(p)
        if key is None:
            continue
        sums[key] = sums.get(key, 0) + value_fn(p)
    return tuple((k, sums[k]) for k in _sort_keys(sums))


# Key/value functions used by the standard views
def by_year(p: Purchase) -> int:
    return p.year


def by_month(p: Purchase) -> int:
    return p.month


def by_weekday(p: Purchase) -> int:
    return p.weekday


def spend(p: Purchase) -> Decimal:
    return p.total


__all__ = ["aggregate", "by_month", "by_weekday", "by_year", "spend"]
