# categorizer/corpus.py
# Category taxonomy and the labelled keyword corpus shared by both classifiers.
# Order matters: the rule-based scan is first-match-wins over TRAINING_DATA,
# and category ids are assigned in CATEGORIES order.
from __future__ import annotations

from typing import Tuple

from spend_core.models import TrainingExample

CATEGORIES: Tuple[str, ...] = (
    "Food & Beverage",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Housing",
    "Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal Care",
    "Gifts & Donations",
    "Other",
)

DEFAULT_CATEGORY = "Other"

# One keyword blob per category; "Other" is the implicit fallback.
TRAINING_DATA: Tuple[TrainingExample, ...] = (
    TrainingExample(
        "starbucks coffee cappuccino latte espresso cafe restaurant mcdonalds "
        "burger pizza food dinner lunch breakfast meal",
        "Food & Beverage",
    ),
    TrainingExample(
        "uber lyft taxi cab grab gojek bus train subway metro transport commute "
        "travel fare ride driver car",
        "Transportation",
    ),
    TrainingExample(
        "amazon ebay walmart target store shopping mall purchase buy clothes "
        "apparel shoes retail online shop ecommerce",
        "Shopping",
    ),
    TrainingExample(
        "netflix hulu movie cinema theater concert disney+ show spotify "
        "streaming music theater ticket",
        "Entertainment",
    ),
    TrainingExample(
        "rent apartment mortgage lease housing condo property home real estate "
        "landlord",
        "Housing",
    ),
    TrainingExample(
        "electricity power gas water utility bill internet wifi broadband "
        "phone telecom",
        "Utilities",
    ),
    TrainingExample(
        "doctor hospital clinic pharmacy medicine prescription health dental "
        "medical insurance care",
        "Healthcare",
    ),
    TrainingExample(
        "tuition school college university course class textbook books "
        "education student campus exam",
        "Education",
    ),
    TrainingExample(
        "flight airline hotel airbnb booking vacation holiday trip resort "
        "tourism tour",
        "Travel",
    ),
    TrainingExample(
        "haircut salon spa gym fitness beauty personal care hygiene cosmetics "
        "makeup skincare",
        "Personal Care",
    ),
    TrainingExample(
        "donation charity gift present give fundraiser donate contribution "
        "nonprofit organization",
        "Gifts & Donations",
    ),
)


def is_category(label: str | None) -> bool:
    return label in CATEGORIES
