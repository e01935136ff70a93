import pytest

from spend_core.models import Transaction
from storage.sqlite_store import TransactionStore


@pytest.fixture
def store(tmp_path):
    s = TransactionStore(tmp_path / "expenses.sqlite")
    yield s
    s.close()


def test_add_and_get(store):
    tid = store.add_transaction("Starbucks", 4.95, "Food & Beverage", "2025-09-14")
    row = store.get_transaction(tid)
    assert row["description"] == "Starbucks"
    assert row["amount"] == 4.95
    assert row["category"] == "Food & Beverage"
    assert row["updated_at"] is None
    assert store.get_transaction(tid + 100) is None


def test_update_category(store):
    tid = store.add_transaction("Team dinner", 80.0, "Other")
    assert store.update_category(tid, "Food & Beverage") is True
    row = store.get_transaction(tid)
    assert row["category"] == "Food & Beverage"
    assert row["updated_at"] is not None
    assert store.update_category(9999, "Food & Beverage") is False


def test_unknown_category_rejected(store):
    with pytest.raises(ValueError):
        store.add_transaction("x", 1.0, "Groceries")
    tid = store.add_transaction("x", 1.0, "Other")
    with pytest.raises(ValueError):
        store.update_category(tid, "Groceries")


def test_insert_many_is_all_or_nothing(store):
    good = Transaction("Uber", 12.0, "Transportation", "2025-01-02")
    bad = Transaction("Mystery", 3.0, "Not A Category")
    with pytest.raises(ValueError):
        store.insert_many([good, bad])
    assert store.list_transactions() == []

    ids = store.insert_many([good, Transaction("Rent", 1200.0, "Housing", "2025-01-01")])
    assert len(ids) == 2
    assert good.id == ids[0]


def test_list_and_totals(store):
    store.add_transaction("Uber", 10.0, "Transportation", "2025-01-03")
    store.add_transaction("Lyft", 15.0, "Transportation", "2025-01-05")
    store.add_transaction("Rent", 1000.0, "Housing", "2025-01-01")
    store.add_transaction("Undated", 1.0, "Other")

    rows = store.list_transactions()
    assert [r["description"] for r in rows] == ["Lyft", "Uber", "Rent", "Undated"]
    assert len(store.list_transactions(category="Transportation")) == 2

    totals = {r["category"]: r for r in store.spending_by_category()}
    assert totals["Transportation"]["total"] == 25.0
    assert totals["Transportation"]["count"] == 2
    assert list(totals)[0] == "Housing"
