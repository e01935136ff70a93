# cli/catproc.py
# Command-line front end for the expense categorizer.
# - List categories (categories)
# - Predict a category, rule-based or model-based (predict)
# - Record a user correction, optionally updating a stored transaction (correct)
# - Bulk import a transactions CSV (import)
# - Scan a receipt image or OCR text file (scan)
#
# Examples:
#   catproc predict "coffee and lunch"
#   catproc predict --model "uber ride to airport"
#   catproc correct "team dinner" "Food & Beverage" --id 12 --db data/expenses.sqlite
#   catproc import data/bank_export.csv --db data/expenses.sqlite
#   catproc scan receipts/starbucks.jpg --json
#
# Exit codes: 0 ok, 2 nothing usable in the input, 3 processing error.

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

import click

from categorizer.corpus import CATEGORIES
from categorizer.service import CategorizerService
from config.loader import load_config, section
from spend_utils.logging_setup import setup_logging

LOGGER = logging.getLogger("catproc")


class _State:
    def __init__(self, config_path: Optional[str]):
        self.cfg = load_config(Path(config_path) if config_path else None)
        self._service: Optional[CategorizerService] = None

    @property
    def service(self) -> CategorizerService:
        if self._service is None:
            self._service = CategorizerService.from_config(self.cfg)
        return self._service

    def db_path(self, override: Optional[str]) -> str:
        return override or section(self.cfg, "storage").get(
            "db_path", "data/expenses.sqlite"
        )


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config.toml.")
@click.option("--quiet", is_flag=True, help="Only warnings/errors.")
@click.option("--verbose", is_flag=True, help="Verbose logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], quiet: bool, verbose: bool) -> None:
    """Expense categorizer CLI."""
    try:
        state = _State(config_path)
    except FileNotFoundError as e:
        raise click.UsageError(str(e))
    level = section(state.cfg, "logging").get("level", "INFO")
    if quiet:
        level = "WARNING"
    if verbose:
        level = "DEBUG"
    setup_logging(level)
    ctx.obj = state


# ----------------------------- categories -----------------------------
@cli.command("categories")
def categories_cmd() -> None:
    """List the category labels."""
    for c in CATEGORIES:
        click.echo(c)


# ----------------------------- predict -----------------------------
@cli.command("predict")
@click.argument("description", nargs=-1, required=True)
@click.option("--model", "use_model", is_flag=True, help="Use the trained classifier.")
@click.option("--json", "output_json", is_flag=True, help="Output JSON.")
@click.pass_obj
def predict_cmd(
    state: _State, description: Tuple[str, ...], use_model: bool, output_json: bool
) -> None:
    """Predict the category of DESCRIPTION."""
    text = " ".join(description)
    svc = state.service
    if use_model:
        pred = asyncio.run(svc.predict_with_model(text))
    else:
        pred = svc.predict(text)

    if output_json:
        click.echo(
            json.dumps(
                {
                    "description": text,
                    "category": pred.category,
                    "source": pred.source.value,
                    "confidence": pred.confidence,
                }
            )
        )
    else:
        conf = f" ({pred.confidence:.0%})" if pred.confidence is not None else ""
        click.echo(f"[{pred.source.value}] {pred.category}{conf}")


# ----------------------------- correct -----------------------------
@cli.command("correct")
@click.argument("description")
@click.argument("category", type=click.Choice(CATEGORIES))
@click.option("--id", "txn_id", type=int, default=None, help="Stored transaction to update.")
@click.option("--db", "db_path", default=None, help="SQLite path (default from config).")
@click.pass_obj
def correct_cmd(
    state: _State,
    description: str,
    category: str,
    txn_id: Optional[int],
    db_path: Optional[str],
) -> None:
    """Record that DESCRIPTION belongs to CATEGORY."""
    asyncio.run(state.service.record_user_correction(description, category))

    if txn_id is None:
        click.echo(f"[ok] correction recorded: {description!r} -> {category}")
        return

    from storage.sqlite_store import TransactionStore

    with TransactionStore(state.db_path(db_path)) as store:
        updated = store.update_category(txn_id, category)
    if not updated:
        click.echo(f"[error] no transaction with id {txn_id}", err=True)
        raise SystemExit(2)
    click.echo(f"[ok] transaction {txn_id} -> {category}")


# ----------------------------- import -----------------------------
@cli.command("import")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--db", "db_path", default=None, help="Save into this SQLite file.")
@click.option("--save", is_flag=True, help="Save into the configured database.")
@click.option("--json", "output_json", is_flag=True, help="Output JSON.")
@click.pass_obj
def import_cmd(
    state: _State,
    csv_path: str,
    db_path: Optional[str],
    save: bool,
    output_json: bool,
) -> None:
    """Categorize every row of a transactions CSV (name, amount, date)."""
    from pipeline.bulk_import import import_csv
    from storage.sqlite_store import TransactionStore

    store = TransactionStore(state.db_path(db_path)) if (db_path or save) else None
    try:
        result = import_csv(csv_path, state.service, store=store)
    except (ValueError, OSError) as e:
        LOGGER.error("Import failed for %s: %s", csv_path, e)
        raise SystemExit(3)
    finally:
        if store is not None:
            store.close()

    if not result.transactions:
        LOGGER.warning("No usable rows in %s", csv_path)
        raise SystemExit(2)

    if output_json:
        click.echo(
            json.dumps(
                {
                    "imported": len(result.transactions),
                    "skipped": result.skipped,
                    "saved_ids": result.ids,
                    "results": [asdict(t) for t in result.transactions],
                }
            )
        )
        return

    for t in result.transactions:
        click.echo(f"  [{t.category}] {t.description} {t.amount:.2f}")
    saved = f", saved {len(result.ids)}" if result.ids else ""
    click.echo(
        f"[import] {len(result.transactions)} categorized, {result.skipped} skipped{saved}"
    )


# ----------------------------- scan -----------------------------
@cli.command("scan")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--json", "output_json", is_flag=True, help="Output JSON.")
@click.pass_obj
def scan_cmd(state: _State, path: str, output_json: bool) -> None:
    """Extract amount/date/merchant from a receipt and suggest a category."""
    from pipeline.scan import scan_receipt

    reader = None
    if Path(path).suffix.lower() != ".txt":
        from ocr.reader import Reader

        reader = Reader.from_config(section(state.cfg, "ocr"))
    try:
        result = scan_receipt(path, state.service, reader=reader)
    except (ValueError, OSError) as e:
        LOGGER.error("Scan failed for %s: %s", path, e)
        raise SystemExit(3)

    scan = result.scan
    if output_json:
        click.echo(
            json.dumps(
                {
                    "source": result.source_path,
                    "merchant": scan.merchant,
                    "amount": scan.amount,
                    "date": scan.date,
                    "category": result.category,
                }
            )
        )
        return
    click.echo(f"Merchant : {scan.merchant or 'N/A'}")
    click.echo(f"Amount   : {scan.amount or 'N/A'}")
    click.echo(f"Date     : {scan.date or 'N/A'}")
    click.echo(f"Category : {result.category}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
