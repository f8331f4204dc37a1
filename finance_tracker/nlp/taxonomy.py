"""Fixed category taxonomy shared by both parser tiers.

Order matters: keyword ties are resolved in favour of the category that
appears first in ``CATEGORIES``.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple


CATEGORIES: Tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Income",
    "Groceries",
    "Travel",
    "Other",
)

DEFAULT_CATEGORY = "Other"

TRANSACTION_TYPES: Tuple[str, ...] = ("income", "expense")

CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "Food & Dining": (
            "restaurant",
            "coffee",
            "starbucks",
            "dinner",
            "lunch",
            "breakfast",
            "food",
            "cafe",
            "pizza",
            "burger",
        ),
        "Transportation": ("gas", "uber", "taxi", "bus", "metro", "parking", "fuel", "lyft", "train", "subway"),
        "Shopping": ("amazon", "store", "mall", "purchase", "buy", "bought", "clothing", "electronics"),
        "Entertainment": ("movie", "netflix", "spotify", "game", "concert", "streaming", "youtube", "cinema"),
        "Bills & Utilities": (
            "electric",
            "water",
            "internet",
            "phone",
            "subscription",
            "rent",
            "mortgage",
            "insurance",
        ),
        "Healthcare": ("doctor", "pharmacy", "hospital", "medicine", "dental", "medical"),
        "Income": ("salary", "paycheck", "freelance", "bonus", "refund", "dividend"),
        "Groceries": ("grocery", "whole foods", "supermarket", "market", "walmart", "target"),
        "Travel": ("hotel", "flight", "booking", "airbnb", "vacation", "trip"),
        "Other": (),
    }
)

# "income" and "paid" flag income without being category keywords
INCOME_KEYWORDS: Tuple[str, ...] = (
    "salary",
    "paycheck",
    "income",
    "bonus",
    "freelance",
    "paid",
    "refund",
    "dividend",
)


def is_valid_category(value: object) -> bool:
    return isinstance(value, str) and value in CATEGORIES


def is_valid_type(value: object) -> bool:
    return isinstance(value, str) and value in TRANSACTION_TYPES
