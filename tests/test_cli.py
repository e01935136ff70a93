# tests/test_cli.py
import json
import subprocess
import sys
from pathlib import Path

from click.testing import CliRunner

from cli.catproc import cli
from storage.sqlite_store import TransactionStore

ROOT = Path(__file__).resolve().parents[1]


def invoke(*args):
    return CliRunner().invoke(cli, ["--quiet", *args])


def last_json(output):
    # log lines may be interleaved with stdout
    lines = [ln for ln in output.splitlines() if ln.startswith("{")]
    return json.loads(lines[-1])


def test_categories_lists_all():
    result = invoke("categories")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 12
    assert lines[-1] == "Other"


def test_predict_rule_based():
    result = invoke("predict", "coffee", "and", "lunch")
    assert result.exit_code == 0, result.output
    assert "[rules] Food & Beverage" in result.output


def test_predict_json_with_model():
    result = invoke("predict", "--model", "--json", "xyzxyz qqqq")
    assert result.exit_code == 0, result.output
    payload = last_json(result.output)
    assert payload["category"] == "Other"
    assert payload["source"] == "rules"


def test_correct_updates_stored_transaction(tmp_path):
    db = tmp_path / "e.sqlite"
    with TransactionStore(db) as store:
        tid = store.add_transaction("team dinner", 80.0, "Other")

    result = invoke("correct", "team dinner", "Food & Beverage", "--id", str(tid), "--db", str(db))
    assert result.exit_code == 0, result.output
    with TransactionStore(db) as store:
        assert store.get_transaction(tid)["category"] == "Food & Beverage"

    missing = invoke("correct", "x", "Other", "--id", "999", "--db", str(db))
    assert missing.exit_code == 2


def test_correct_rejects_unknown_category():
    result = invoke("correct", "x", "Groceries")
    assert result.exit_code != 0


def test_import_json_and_save(transactions_csv, tmp_path):
    db = tmp_path / "bulk.sqlite"
    result = invoke("import", str(transactions_csv), "--db", str(db), "--json")
    assert result.exit_code == 0, result.output
    payload = last_json(result.output)
    assert payload["imported"] == 4
    assert payload["skipped"] == 1
    assert len(payload["saved_ids"]) == 4


def test_import_exit_codes(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("name,amount\n", encoding="utf-8")
    assert invoke("import", str(empty)).exit_code == 2

    bad = tmp_path / "bad.csv"
    bad.write_text("foo,bar\n1,2\n", encoding="utf-8")
    assert invoke("import", str(bad)).exit_code == 3


def test_scan_text_receipt(sample_receipt_txt):
    result = invoke("scan", "--json", str(sample_receipt_txt))
    assert result.exit_code == 0, result.output
    payload = last_json(result.output)
    assert payload["merchant"] == "STARBUCKS COFFEE"
    assert payload["category"] == "Food & Beverage"
    assert payload["date"] == "2025-09-14"


def test_missing_config_is_usage_error(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.toml"), "categories"])
    assert result.exit_code == 2


def test_module_entrypoint_runs():
    proc = subprocess.run(
        [sys.executable, "-m", "cli.catproc", "--quiet", "predict", "uber ride"],
        capture_output=True,
        text=True,
        cwd=ROOT,
    )
    assert proc.returncode == 0, proc.stderr
    assert "Transportation" in proc.stdout
