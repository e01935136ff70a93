# tasks.py
"""
Developer task runner using Invoke.
Run `inv --list` to see tasks.

Key tasks:
  inv predict --text "coffee and lunch" [--model]
  inv scan --input <img|txt>
  inv import-csv --input <csv> [--db data/expenses.sqlite]
  inv ui
  inv test
  inv clean
"""

from invoke import task
from pathlib import Path
import shlex
import shutil
import sys


REPO = Path(__file__).parent


def _python():
    """Return the python executable inside the current venv."""
    return sys.executable or "python"


def _catproc(c, *args):
    quoted = " ".join(shlex.quote(str(a)) for a in args)
    c.run(f"{_python()} -m cli.catproc {quoted}", pty=False)


@task(help={"text": "Description to categorize", "model": "Use the trained classifier"})
def predict(c, text, model=False):
    """Predict a category for one description."""
    args = ["predict", text]
    if model:
        args.insert(1, "--model")
    _catproc(c, *args)


@task(help={"input": "Receipt image or OCR .txt"})
def scan(c, input):
    """Scan one receipt."""
    _catproc(c, "scan", input)


@task(help={"input": "Transactions CSV (name, amount, date)", "db": "SQLite path to save into"})
def import_csv(c, input, db=None):
    """Bulk-categorize a transactions CSV."""
    args = ["import", input]
    if db:
        args += ["--db", db]
    _catproc(c, *args)


@task
def ui(c):
    """Launch the Streamlit expense page."""
    c.run(f"{_python()} -m streamlit run {REPO / 'ui' / 'app.py'}", pty=False)


@task
def test(c):
    """Run the test suite."""
    c.run(f"{_python()} -m pytest -q", pty=False)


@task
def clean(c):
    """Remove caches and local databases."""
    for p in REPO.rglob("__pycache__"):
        shutil.rmtree(p, ignore_errors=True)
    shutil.rmtree(REPO / ".pytest_cache", ignore_errors=True)
    shutil.rmtree(REPO / "data", ignore_errors=True)
    print("[OK] cleaned")
