import pytest

from pipeline.bulk_import import import_csv, load_transactions_csv
from storage.sqlite_store import TransactionStore


def test_rows_are_categorized_and_blank_names_skipped(service, transactions_csv):
    result = import_csv(transactions_csv, service)
    assert result.skipped == 1
    assert result.ids == []
    by_name = {t.description: t for t in result.transactions}
    assert by_name["Uber ride downtown"].category == "Transportation"
    assert by_name["Netflix monthly"].category == "Entertainment"
    assert by_name["Landlord rent"].category == "Housing"
    assert by_name["Landlord rent"].amount == 1450.0
    assert by_name["Mystery xyzxyz"].category == "Other"
    assert by_name["Mystery xyzxyz"].transaction_date is None
    assert by_name["Uber ride downtown"].transaction_date == "2025-09-01"


def test_import_saves_batch(service, transactions_csv, tmp_path):
    with TransactionStore(tmp_path / "x.sqlite") as store:
        result = import_csv(transactions_csv, service, store=store)
        assert len(result.ids) == 4
        rows = store.list_transactions()
        assert {r["category"] for r in rows} == {
            "Transportation",
            "Entertainment",
            "Housing",
            "Other",
        }
        assert result.transactions[0].id == result.ids[0]


def test_missing_columns_rejected(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text("description,value\ncoffee,3.00\n", encoding="utf-8")
    with pytest.raises(ValueError, match="name"):
        load_transactions_csv(p)


def test_header_case_is_normalized(service, tmp_path):
    p = tmp_path / "caps.csv"
    p.write_text("Name,Amount\nGym membership,40\n", encoding="utf-8")
    result = import_csv(p, service)
    assert result.transactions[0].category == "Personal Care"
    assert result.transactions[0].amount == 40.0
