"""Renderer-side shaping of :class:`~purchase_history.models.Views`.

The pipeline hands out raw keys, ``Decimal`` sums and ``Purchase`` objects.
This module turns them into what a chart or table shows: month and weekday
labels, percentage shares, formatted amounts and dates. ``ViewsReport`` is
also the JSON document printed by ``purchase-history summarize --json``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.table import Table

from .models import AggregateSeries, Purchase, Views

MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip
WEEKDAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
UNKNOWN_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# DTOs
# ---------------------------------------------------------------------------


class SeriesPointOut(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    label: str
    value: float


class RankedPurchaseOut(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    product: str
    date: datetime
    amount: Decimal
    display_amount: str


class ViewsReport(BaseModel):
    """Everything a front end needs to draw the charts and tables."""

    model_config = ConfigDict(strict=True, extra="forbid")

    currency: str
    years: list[int]
    year_from: int | None = None
    year_to: int | None = None
    spend_by_year: list[SeriesPointOut]
    spend_by_month: list[SeriesPointOut]
    weekday_share: list[SeriesPointOut]
    payment_type_share: list[SeriesPointOut]
    highest: list[RankedPurchaseOut]
    lowest: list[RankedPurchaseOut]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_amount(value: Decimal, currency: str) -> str:
    return f"{value:,.2f} {currency}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d %b %Y")


def month_label(month: int) -> str:
    return MONTH_LABELS[month - 1]


def weekday_label(weekday: int) -> str:
    return WEEKDAY_LABELS[weekday]


def percentages(series: AggregateSeries) -> list[float]:
    """Each value as a percentage of the series total, one decimal place.

    A series summing to zero gives ``0.0`` everywhere.
    """

    total = sum((Decimal(v) for _, v in series), Decimal(0))
    if total == 0:
        return [0.0 for _ in series]
    return [float(round(Decimal(v) / total * 100, 1)) for _, v in series]


def _points(labels: Sequence[str], values: Sequence[float]) -> list[SeriesPointOut]:
    return [SeriesPointOut(label=k, value=v) for k, v in zip(labels, values, strict=True)]


def _ranked(ranking: Sequence[Purchase], currency: str) -> list[RankedPurchaseOut]:
    return [
        RankedPurchaseOut(
            product=p.product,
            date=p.date,
            amount=p.total,
            display_amount=format_amount(p.total, currency),
        )
        for p in ranking
    ]


def build_report(
    views: Views,
    *,
    currency: str,
    years: Sequence[int] = (),
    year_from: int | None = None,
    year_to: int | None = None,
) -> ViewsReport:
    """Label and scale ``views`` for display.

    Amounts are shown in the single display ``currency``; no conversion is
    applied to purchases recorded in another currency.
    """

    return ViewsReport(
        currency=currency,
        years=list(years),
        year_from=year_from,
        year_to=year_to,
        spend_by_year=_points(
            [str(k) for k, _ in views.year_series],
            [float(v) for _, v in views.year_series],
        ),
        spend_by_month=_points(
            [month_label(int(k)) for k, _ in views.month_series],
            [float(v) for _, v in views.month_series],
        ),
        weekday_share=_points(
            [weekday_label(int(k)) for k, _ in views.weekday_series],
            percentages(views.weekday_series),
        ),
        payment_type_share=_points(
            [str(k) or UNKNOWN_LABEL for k, _ in views.payment_type_series],
            percentages(views.payment_type_series),
        ),
        highest=_ranked(views.top_ranking, currency),
        lowest=_ranked(views.bottom_ranking, currency),
    )


# ---------------------------------------------------------------------------
# Terminal rendering
# ---------------------------------------------------------------------------


def _series_table(title: str, points: Sequence[SeriesPointOut], value_header: str) -> Table:
    table = Table(title=title)
    table.add_column("Label")
    table.add_column(value_header, justify="right")
    for pt in points:
        table.add_row(pt.label, f"{pt.value:,.2f}" if value_header != "%" else f"{pt.value:.1f}")
    return table


def _ranking_table(title: str, rows: Sequence[RankedPurchaseOut], style: str) -> Table:
    table = Table(title=title)
    table.add_column("Product")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    for r in rows:
        table.add_row(r.product, format_date(r.date), r.display_amount, style=style)
    return table


def render_report(report: ViewsReport, console: Console | None = None) -> None:
    """Print ``report`` as a set of rich tables."""

    console = console or Console()
    span = ""
    if report.year_from is not None and report.year_to is not None:
        span = f" ({report.year_from}-{report.year_to})"
    console.print(f"Display currency: {report.currency}{span}")
    if not report.spend_by_year:
        console.print("No purchases in the selected range.")
        return
    console.print(_series_table("Spend by year", report.spend_by_year, report.currency))
    console.print(_series_table("Spend by month", report.spend_by_month, report.currency))
    console.print(_series_table("Purchases by weekday", report.weekday_share, "%"))
    if report.payment_type_share:
        console.print(_series_table("Spend by payment type", report.payment_type_share, "%"))
    console.print(_ranking_table("Highest purchases", report.highest, "green"))
    console.print(_ranking_table("Lowest purchases", report.lowest, "red"))


__all__ = [
    "MONTH_LABELS",
    "RankedPurchaseOut",
    "SeriesPointOut",
    "UNKNOWN_LABEL",
    "ViewsReport",
    "WEEKDAY_LABELS",
    "build_report",
    "format_amount",
    "format_date",
    "month_label",
    "percentages",
    "render_report",
    "weekday_label",
]
