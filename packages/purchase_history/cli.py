# ruff: noqa: I001
"""CLI for the ``purchase_history`` package.

Command handlers (``cmd_summarize``, ``cmd_years``) are plain functions that
return a process exit code; the Typer commands below are thin wrappers around
them. Environment variables are loaded from a local ``.env`` with
``python-dotenv`` before anything runs.
"""

from __future__ import annotations

import csv
import json
import locale
import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .ingest import read_purchase_csv
from .logging_setup import configure_logging
from .pipeline import LoadError, MissingColumnsError, PurchaseHistory
from .ranking import DEFAULT_RANKING_SIZE
from .report import build_report, render_report


# ---- Small module-level helpers used by CLI commands -------------------------


def _resolve_ranking_size(top: int | None) -> int:
    """Resolve how many purchases each ranking lists.

    An explicit ``--top`` wins, then ``PH_RANKING_SIZE``, then the default of 5.
    Non-positive or unparsable env values are ignored.
    """

    if top is not None:
        return top
    env_val = os.getenv("PH_RANKING_SIZE")
    try:
        size = int(env_val) if env_val else None
    except ValueError:
        size = None
    if size is not None and size > 0:
        return size
    return DEFAULT_RANKING_SIZE


def _use_env_collation() -> None:
    """Take ``LC_COLLATE`` from the environment; stay on C if it is unavailable."""

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass


def _load_session(csv_path: str) -> PurchaseHistory | None:
    """Read and load ``csv_path``; print a one-line error and return ``None`` on failure."""

    try:
        export = read_purchase_csv(csv_path)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return None
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return None
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return None
    except (OSError, ValueError) as e:
        print(f"Error: Cannot read '{csv_path}': {e}", file=sys.stderr)
        return None

    session = PurchaseHistory()
    try:
        session.load(export.records, export.headers)
    except MissingColumnsError as e:
        print(
            f"Error: {e}. Please provide an Amazon Retail Order History CSV file.",
            file=sys.stderr,
        )
        return None
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None
    return session


# ---- Command handlers ---------------------------------------------------------


def cmd_summarize(
    csv_path: str,
    *,
    year_from: int | None = None,
    year_to: int | None = None,
    top: int | None = None,
    as_json: bool = False,
) -> int:
    """Load a purchase-history CSV and print spend views and rankings.

    A missing year bound defaults to the earliest/latest year in the file.
    Returns ``0`` on success and ``1`` when the file cannot be loaded.
    """

    session = _load_session(csv_path)
    if session is None:
        return 1

    years = session.available_years()
    lo = year_from if year_from is not None else years[0]
    hi = year_to if year_to is not None else years[-1]
    views = session.views(lo, hi, n=_resolve_ranking_size(top))
    report = build_report(views, currency=session.currency, years=years, year_from=lo, year_to=hi)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        render_report(report)
    return 0


def cmd_years(csv_path: str) -> int:
    """Print the distinct purchase years in ``csv_path`` as a JSON list."""

    session = _load_session(csv_path)
    if session is None:
        return 1
    typer.echo(json.dumps(session.available_years()))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Summarize an Amazon-style purchase history CSV: spend by period, weekday, "
    "payment type, and the highest/lowest purchases.",
)


# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--csv-path",
    help="Path to a Retail Order History CSV file",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
    readable=True,
)


@app.command("summarize")
def summarize_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    *,
    year_from: int | None = typer.Option(None, help="First year to include (inclusive)."),
    year_to: int | None = typer.Option(None, help="Last year to include (inclusive)."),
    top: int | None = typer.Option(
        None, help="Rows per ranking (falls back to PH_RANKING_SIZE, then 5)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
) -> None:
    """Print spend views and top/bottom purchases for a CSV export."""

    code = cmd_summarize(
        str(csv_path), year_from=year_from, year_to=year_to, top=top, as_json=as_json
    )
    if code:
        raise typer.Exit(code)


@app.command("years")
def years_cmd(csv_path: Annotated[Path, CSV_PATH_OPTION]) -> None:
    """List the purchase years available in a CSV export."""

    code = cmd_years(str(csv_path))
    if code:
        raise typer.Exit(code)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to PURCHASE_HISTORY_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory without overriding
    variables that are already set, adopts the environment's collation for
    sorting text labels, then configures logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    _use_env_collation()
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
