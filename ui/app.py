# ui/app.py
"""
Expense entry page.

- Category suggestion while typing (rule-based, every rerun)
- Optional refinement with the trained classifier
- Receipt text upload to prefill amount/date/merchant
- Category corrections on saved expenses

Run: streamlit run ui/app.py
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from categorizer.corpus import CATEGORIES  # noqa: E402
from categorizer.service import CategorizerService  # noqa: E402
from config.loader import load_config, section  # noqa: E402
from parser.receipt import parse_receipt_text  # noqa: E402
from spend_utils.logging_setup import setup_logging  # noqa: E402
from storage.sqlite_store import TransactionStore  # noqa: E402
from ui.prefill import PREFILL_KEY, prefill_from_receipt  # noqa: E402

st.set_page_config(page_title="Expenses", page_icon="💰", layout="wide")


@st.cache_resource
def get_service() -> CategorizerService:
    cfg = load_config()
    setup_logging(cfg=section(cfg, "logging"))
    return CategorizerService.from_config(cfg)


def get_store() -> TransactionStore:
    # sqlite connections are per-thread; streamlit reruns may switch threads.
    # Opened per rerun and closed by the `with` block below.
    db_path = section(load_config(), "storage").get("db_path", "data/expenses.sqlite")
    return TransactionStore(db_path)


def suggest_category(svc: CategorizerService, description: str, use_model: bool) -> str:
    # short inputs match too eagerly as substrings
    if len(description.strip()) <= 3:
        return CATEGORIES[-1]
    if use_model:
        return asyncio.run(svc.predict_category_with_model(description))
    return svc.predict_category(description)


svc = get_service()

st.title("💰 Expenses")

# ----------------------------- Receipt prefill -----------------------------
with st.sidebar:
    st.subheader("Receipt")
    upload = st.file_uploader("OCR text of a receipt", type=["txt"])
    if upload is not None:
        text = upload.getvalue().decode("utf-8", errors="ignore")
        prefill_from_receipt(st.session_state, upload.file_id, text)
        scan = parse_receipt_text(text)
        st.caption(f"Merchant: {scan.merchant or 'N/A'} · Amount: {scan.amount or 'N/A'}")
    else:
        # re-uploading the same file prefills again
        st.session_state.pop(PREFILL_KEY, None)

with get_store() as store:
    # ----------------------------- Add expense -----------------------------
    st.subheader("Add expense")
    description = st.text_input("Description", key="description", placeholder="e.g. Grocery shopping")
    use_model = st.toggle("Refine with model", value=False)
    suggested = suggest_category(svc, description, use_model) if description else CATEGORIES[-1]

    col1, col2, col3 = st.columns(3)
    with col1:
        amount = st.number_input("Amount", min_value=0.0, step=0.01, key="amount")
    with col2:
        txn_date = st.date_input("Date", key="txn_date")
    with col3:
        category = st.selectbox("Category", CATEGORIES, index=CATEGORIES.index(suggested))

    if st.button("Add Expense", type="primary", disabled=not description):
        if category != suggested:
            asyncio.run(svc.record_user_correction(description, category))
        txn_id = store.add_transaction(description, amount, category, txn_date.isoformat())
        st.success(f"Saved #{txn_id} as {category}")

    # ----------------------------- Recent expenses -----------------------------
    st.divider()
    st.subheader("Recent expenses")
    rows = store.list_transactions(limit=50)
    if not rows:
        st.info("No expenses yet.")
    else:
        for row in rows:
            c1, c2, c3 = st.columns([4, 2, 3])
            c1.write(f"{row['transaction_date'] or ''} · {row['description']}")
            c2.write(f"{row['amount']:.2f}")
            new_cat = c3.selectbox(
                "Category",
                CATEGORIES,
                index=CATEGORIES.index(row["category"]),
                key=f"cat_{row['id']}",
                label_visibility="collapsed",
            )
            if new_cat != row["category"]:
                asyncio.run(svc.record_user_correction(row["description"], new_cat))
                store.update_category(row["id"], new_cat)
                st.rerun()

        totals = pd.DataFrame(store.spending_by_category())
        if not totals.empty:
            st.bar_chart(totals.set_index("category")["total"])
