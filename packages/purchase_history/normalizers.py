"""Row normalization: raw purchase-history rows to :class:`Purchase`.

Amounts are lenient: anything that does not parse becomes ``0`` and the row
is kept. Dates are strict: a row whose order date cannot be parsed is dropped,
because every view places purchases in time.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation

from .fields import (
    AMOUNT_ALIASES,
    CURRENCY_ALIASES,
    DATE_ALIASES,
    PRODUCT_ALIASES,
    resolve_field,
)
from .logging_setup import get_logger
from .models import Purchase, RawRecord

logger = get_logger(__name__)

DEFAULT_CURRENCY = "USD"

# ---------------------------------------------------------------------------
# Helpers (amount/date parsing)
# ---------------------------------------------------------------------------

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
# Leading decimal number of the cleaned string; trailing junk is ignored.
_LEADING_NUMBER = re.compile(r"[-]?(?:\d+\.?\d*|\.\d+)")

# Tried in order after ISO 8601.
_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S %Z",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def parse_amount(raw: str | None) -> Decimal:
    """Parse a currency-formatted amount, falling back to ``Decimal(0)``.

    Every character other than digits, ``.`` and ``-`` is stripped first, so
    ``"$1,234.56"`` and ``"USD 1234.56"`` both give ``Decimal("1234.56")``.
    """

    if not raw:
        return Decimal(0)
    m = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", raw))
    if m is None:
        return Decimal(0)
    try:
        d = Decimal(m.group(0))
    except InvalidOperation:
        return Decimal(0)
    return d if d.is_finite() else Decimal(0)


def parse_order_date(raw: str | None) -> datetime | None:
    """Parse an order timestamp; return ``None`` when it is not a date.

    ISO 8601 (with ``Z`` or an offset) is tried first, then the slash and
    textual-month layouts seen in older exports.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def sunday_weekday(dt: datetime) -> int:
    """Day of week counting Sunday as 0 and Saturday as 6."""

    return (dt.weekday() + 1) % 7


# ---------------------------------------------------------------------------
# Row normalizers
# ---------------------------------------------------------------------------


def normalize_record(record: RawRecord) -> Purchase | None:
    """Build a :class:`Purchase` from one raw row, or ``None`` to drop it."""

    date = parse_order_date(resolve_field(record, DATE_ALIASES))
    if date is None:
        return None

    return Purchase(
        total=parse_amount(resolve_field(record, AMOUNT_ALIASES)),
        date=date,
        product=resolve_field(record, PRODUCT_ALIASES, "") or "",
        currency=resolve_field(record, CURRENCY_ALIASES, DEFAULT_CURRENCY) or DEFAULT_CURRENCY,
        year=date.year,
        month=date.month,
        weekday=sunday_weekday(date),
        raw=record,
    )


def iter_purchases(records: Iterable[Mapping[str, str]]) -> Iterator[Purchase]:
    for record in records:
        purchase = normalize_record(record)
        if purchase is not None:
            yield purchase


def normalize_records(records: Iterable[Mapping[str, str]]) -> list[Purchase]:
    """Normalize every row, preserving order and dropping undated rows."""

    rows = list(records)
    purchases = list(iter_purchases(rows))
    dropped = len(rows) - len(purchases)
    if dropped:
        logger.debug("Dropped %d of %d rows with an unparsable order date", dropped, len(rows))
    return purchases


__all__ = [
    "DEFAULT_CURRENCY",
    "iter_purchases",
    "normalize_record",
    "normalize_records",
    "parse_amount",
    "parse_order_date",
    "sunday_weekday",
]
