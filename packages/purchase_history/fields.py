"""Logical field lookup for purchase-history rows.

Two levels of tolerance apply:

- Header presence (load time) is fuzzy: whitespace is removed, case is folded,
  and a required name only has to appear as a substring of some header.
- Value extraction (per row) is exact: each logical field has a fixed, ordered
  alias list and the first alias holding a non-empty value wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

# Ordered alias lists; the first alias with a non-empty value wins.
AMOUNT_ALIASES: tuple[str, ...] = ("TotalOwed", "Total Owed", "Total")
DATE_ALIASES: tuple[str, ...] = ("OrderDate", "Order Date")
PRODUCT_ALIASES: tuple[str, ...] = ("ProductName", "Product Name", "product_name", "Product")
CURRENCY_ALIASES: tuple[str, ...] = ("Currency",)
STATUS_ALIASES: tuple[str, ...] = ("OrderStatus", "Order Status")
PAYMENT_TYPE_ALIASES: tuple[str, ...] = ("Payment Instrument Type", "PaymentInstrumentType")

REQUIRED_COLUMNS: tuple[str, ...] = (
    "OrderDate",
    "TotalOwed",
    "ProductName",
    "OrderStatus",
    "Currency",
)

_WHITESPACE = re.compile(r"\s+")


def resolve_field(
    record: Mapping[str, str | None],
    aliases: Sequence[str],
    default: str | None = None,
) -> str | None:
    """Return the value of the first alias present with a non-empty value.

    Lookup is by exact key. Missing keys, ``None`` and ``""`` all fall through
    to the next alias; ``default`` is returned when nothing matches.
    """

    for alias in aliases:
        value = record.get(alias)
        if value:
            return value
    return default


def compact_header(name: str) -> str:
    """Strip all whitespace from ``name`` and lower-case it."""

    return _WHITESPACE.sub("", name).lower()


def missing_required_columns(
    headers: Iterable[str], required: Sequence[str] = REQUIRED_COLUMNS
) -> list[str]:
    """Return the required logical columns that no header covers.

    A required column is covered when its compacted form is a substring of at
    least one compacted header, so ``"Order Date"`` and ``"orderdate (UTC)"``
    both satisfy ``OrderDate``.
    """

    compacted = [compact_header(h) for h in headers if h]
    missing: list[str] = []
    for col in required:
        needle = compact_header(col)
        if not any(needle in h for h in compacted):
            missing.append(col)
    return missing


def has_required_columns(headers: Iterable[str]) -> bool:
    return not missing_required_columns(headers)


__all__ = [
    "AMOUNT_ALIASES",
    "CURRENCY_ALIASES",
    "DATE_ALIASES",
    "PAYMENT_TYPE_ALIASES",
    "PRODUCT_ALIASES",
    "REQUIRED_COLUMNS",
    "STATUS_ALIASES",
    "compact_header",
    "has_required_columns",
    "missing_required_columns",
    "resolve_field",
]
