"""Load/filter/view orchestration for purchase-history exports.

The module-level functions are pure. :class:`PurchaseHistory` is the session
object a front end holds on to: it owns the currently loaded purchases and the
inferred display currency, and nothing else.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping, Sequence

from .aggregate import aggregate, by_month, by_weekday, by_year, spend
from .currency import infer_display_currency
from .fields import PAYMENT_TYPE_ALIASES, missing_required_columns, resolve_field
from .logging_setup import get_logger
from .models import LoadResult, Purchase, Views
from .normalizers import DEFAULT_CURRENCY, normalize_records
from .ranking import DEFAULT_RANKING_SIZE, bottom_purchases, top_purchases

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class LoadError(ValueError):
    """A record set was rejected as a whole; no views were produced."""


class MissingColumnsError(LoadError):
    """The export lacks one or more required logical columns."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__("missing required columns: " + ", ".join(self.missing))


class NoPurchasesError(LoadError):
    """The columns are valid but no row has a parsable order date."""

    def __init__(self, row_count: int) -> None:
        self.row_count = row_count
        super().__init__(f"none of {row_count} rows has a usable order date")


# ---------------------------------------------------------------------------
# Pure pipeline steps
# ---------------------------------------------------------------------------


def _headers_of(records: Sequence[Mapping[str, str]]) -> list[str]:
    seen: dict[str, None] = {}
    for r in records:
        for k in r:
            if k is not None:
                seen.setdefault(k, None)
    return list(seen)


def load(
    records: Iterable[Mapping[str, str]],
    headers: Iterable[str] | None = None,
) -> LoadResult:
    """Validate headers, normalize rows and infer the display currency.

    When ``headers`` is omitted the union of record keys is checked instead.
    Raises :class:`MissingColumnsError` or :class:`NoPurchasesError`.
    """

    rows = list(records)
    header_list = list(headers) if headers is not None else _headers_of(rows)
    missing = missing_required_columns(header_list)
    if missing:
        raise MissingColumnsError(missing)

    purchases = tuple(normalize_records(rows))
    if not purchases:
        raise NoPurchasesError(len(rows))

    currency = infer_display_currency(purchases)
    logger.info(
        "Loaded %d purchases from %d rows (display currency %s)",
        len(purchases),
        len(rows),
        currency,
    )
    return LoadResult(currency=currency, purchases=purchases)


def filter_by_year_range(
    purchases: Iterable[Purchase], year_from: int, year_to: int
) -> list[Purchase]:
    """Keep purchases with ``year_from <= year <= year_to``."""

    return [p for p in purchases if year_from <= p.year <= year_to]


def payment_type(p: Purchase) -> str | None:
    return resolve_field(p.raw, PAYMENT_TYPE_ALIASES)


def build_views(purchases: Iterable[Purchase], n: int = DEFAULT_RANKING_SIZE) -> Views:
    """Compute the four aggregate series and both rankings."""

    ps = list(purchases)
    return Views(
        year_series=aggregate(ps, by_year, spend),
        month_series=aggregate(ps, by_month, spend),
        weekday_series=aggregate(ps, by_weekday),
        payment_type_series=aggregate(ps, payment_type, spend),
        top_ranking=top_purchases(ps, n),
        bottom_ranking=bottom_purchases(ps, n),
    )


def available_years(purchases: Iterable[Purchase]) -> list[int]:
    """Distinct purchase years, ascending."""

    return sorted({p.year for p in purchases})


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class PurchaseHistory:
    """Holds one loaded dataset at a time.

    ``load`` replaces the dataset atomically: state is cleared first, the new
    records are processed, and only a successful load is published. Readers
    take the same lock, so nobody observes a half-replaced dataset.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._purchases: tuple[Purchase, ...] = ()
        self._currency = DEFAULT_CURRENCY

    @property
    def purchases(self) -> tuple[Purchase, ...]:
        with self._lock:
            return self._purchases

    @property
    def currency(self) -> str:
        with self._lock:
            return self._currency

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            return bool(self._purchases)

    def clear(self) -> None:
        with self._lock:
            self._reset()

    def _reset(self) -> None:
        self._purchases = ()
        self._currency = DEFAULT_CURRENCY

    def load(
        self,
        records: Iterable[Mapping[str, str]],
        headers: Iterable[str] | None = None,
    ) -> LoadResult:
        with self._lock:
            self._reset()
            result = load(records, headers)
            self._purchases = result.purchases
            self._currency = result.currency
            return result

    def available_years(self) -> list[int]:
        return available_years(self.purchases)

    def views(
        self,
        year_from: int | None = None,
        year_to: int | None = None,
        *,
        n: int = DEFAULT_RANKING_SIZE,
    ) -> Views:
        """Build views over the loaded data, optionally limited to a year range.

        A missing bound is open-ended. With nothing loaded the views are empty.
        """

        purchases = self.purchases
        if year_from is not None or year_to is not None:
            lo = year_from if year_from is not None else min((p.year for p in purchases), default=0)
            hi = year_to if year_to is not None else max((p.year for p in purchases), default=0)
            purchases = filter_by_year_range(purchases, lo, hi)
        return build_views(purchases, n)


__all__ = [
    "LoadError",
    "MissingColumnsError",
    "NoPurchasesError",
    "PurchaseHistory",
    "available_years",
    "build_views",
    "filter_by_year_range",
    "load",
    "payment_type",
]
