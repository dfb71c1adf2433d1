"""Public interface for the ``purchase_history`` package.

Only symbol re-exports live here; see the individual modules for behavior.
"""

from .aggregate import aggregate
from .currency import infer_display_currency
from .fields import has_required_columns, missing_required_columns, resolve_field
from .ingest import CsvExport, read_purchase_csv, read_purchase_csv_text
from .models import (
    AggregateSeries,
    LoadResult,
    Purchase,
    Ranking,
    RawRecord,
    Views,
    ranking_rows,
)
from .normalizers import normalize_record, normalize_records
from .pipeline import (
    LoadError,
    MissingColumnsError,
    NoPurchasesError,
    PurchaseHistory,
    available_years,
    build_views,
    filter_by_year_range,
    load,
)
from .ranking import bottom_purchases, top_purchases

__all__ = [
    # Pipeline
    "aggregate",
    "available_years",
    "bottom_purchases",
    "build_views",
    "filter_by_year_range",
    "has_required_columns",
    "infer_display_currency",
    "load",
    "missing_required_columns",
    "normalize_record",
    "normalize_records",
    "resolve_field",
    "top_purchases",
    # Session / errors
    "PurchaseHistory",
    "LoadError",
    "MissingColumnsError",
    "NoPurchasesError",
    # Ingest
    "CsvExport",
    "read_purchase_csv",
    "read_purchase_csv_text",
    # Models / types
    "AggregateSeries",
    "LoadResult",
    "Purchase",
    "Ranking",
    "RawRecord",
    "Views",
    "ranking_rows",
]
