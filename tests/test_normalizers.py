from datetime import datetime
from decimal import Decimal

import pytest

from purchase_history.normalizers import (
    normalize_record,
    normalize_records,
    parse_amount,
    parse_order_date,
    sunday_weekday,
)
from tests.helpers.records import row


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$1,234.56", Decimal("1234.56")),
        ("-$5.00", Decimal("-5.00")),
        ("USD 19.99", Decimal("19.99")),
        ("'12.5'", Decimal("12.5")),
        ("1.2.3", Decimal("1.2")),
        ("Not Available", Decimal(0)),
        ("-", Decimal(0)),
        ("", Decimal(0)),
        (None, Decimal(0)),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2023-01-05", (2023, 1, 5)),
        ("2023-01-05T12:30:00Z", (2023, 1, 5)),
        ("2023-01-05T12:30:00.000Z", (2023, 1, 5)),
        ("2023-01-05 10:00:00 UTC", (2023, 1, 5)),
        ("01/05/2023", (2023, 1, 5)),
        ("01/05/2023 08:15:00", (2023, 1, 5)),
        ("Jan 5, 2023", (2023, 1, 5)),
        ("5 January 2023", (2023, 1, 5)),
    ],
)
def test_parse_order_date_formats(raw, expected):
    dt = parse_order_date(raw)
    assert dt is not None
    assert (dt.year, dt.month, dt.day) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "Not Available", "2023-13-40"])
def test_parse_order_date_rejects_garbage(raw):
    assert parse_order_date(raw) is None


def test_sunday_weekday_convention():
    assert sunday_weekday(datetime(2023, 1, 1)) == 0  # Sunday
    assert sunday_weekday(datetime(2023, 1, 5)) == 4  # Thursday
    assert sunday_weekday(datetime(2023, 1, 7)) == 6  # Saturday


def test_normalize_record_derives_calendar_fields():
    raw = row(amount="$42.10", date="2023-03-12T09:00:00Z", product="Kettle", currency="EUR")
    p = normalize_record(raw)

    assert p is not None
    assert p.total == Decimal("42.10")
    assert (p.year, p.month, p.weekday) == (2023, 3, 0)
    assert p.product == "Kettle"
    assert p.currency == "EUR"
    assert p.raw is raw


def test_normalize_record_uses_compact_header_aliases():
    raw = {"OrderDate": "2022-07-04", "TotalOwed": "3.50", "ProductName": "Pen"}
    p = normalize_record(raw)

    assert p is not None
    assert p.total == Decimal("3.50")
    assert p.product == "Pen"
    assert p.currency == "USD"


def test_normalize_record_falls_back_to_total_and_product_columns():
    raw = {"Order Date": "2022-07-04", "Total": "8", "Product": "Mug"}
    p = normalize_record(raw)

    assert p is not None
    assert p.total == Decimal(8)
    assert p.product == "Mug"


def test_normalize_record_defaults_missing_optional_fields():
    p = normalize_record({"Order Date": "2022-07-04"})

    assert p is not None
    assert p.total == Decimal(0)
    assert p.product == ""
    assert p.currency == "USD"


def test_malformed_amount_keeps_row_with_zero_total():
    p = normalize_record(row(amount="N/A"))
    assert p is not None
    assert p.total == 0


def test_unparsable_date_excludes_row():
    assert normalize_record(row(date="Not Available")) is None
    assert normalize_record({"Total Owed": "5.00"}) is None


def test_normalize_records_drops_only_undated_rows_and_keeps_order():
    rows = [
        row(product="a", date="2021-02-01"),
        row(product="b", date="bogus"),
        row(product="c", date="2023-05-06", amount="garbage"),
        row(product="d", date=""),
    ]
    purchases = normalize_records(rows)

    assert [p.product for p in purchases] == ["a", "c"]
    assert len(purchases) == len(rows) - 2
