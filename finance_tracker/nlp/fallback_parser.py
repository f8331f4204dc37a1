import math
import re
from typing import Optional, Tuple

from finance_tracker.models.transaction import ParsedTransaction
from finance_tracker.nlp.taxonomy import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, INCOME_KEYWORDS


# ASCII digits only; float() would also accept Arabic-Indic or full-width digits
_AMOUNT_RE = re.compile(r"\$?(\d+\.?\d*)", re.ASCII)
_LEADING_AT_RE = re.compile(r"^at\s+", re.IGNORECASE)

BASE_CONFIDENCE = 0.6


def extract_amount(text: str) -> Tuple[float, Optional[re.Match]]:
    m = _AMOUNT_RE.search(text)
    if not m:
        return 0.0, None
    amount = float(m.group(1))
    if not math.isfinite(amount):
        # digit runs too long for a float overflow to inf; treat as no amount
        return 0.0, None
    return amount, m


def classify_category(text: str) -> str:
    """
    Keyword count per category, in taxonomy order.
    Strictly greater count wins, so earlier categories keep ties.
    """
    lowered = text.lower()
    best, best_hits = DEFAULT_CATEGORY, 0
    for category, keywords in CATEGORY_KEYWORDS.items():
        hits = sum(1 for k in keywords if k in lowered)
        if hits > best_hits:
            best, best_hits = category, hits
    return best


def classify_type(text: str) -> str:
    lowered = text.lower()
    return "income" if any(k in lowered for k in INCOME_KEYWORDS) else "expense"


def clean_description(text: str) -> str:
    cleaned = _AMOUNT_RE.sub("", text, count=1)
    cleaned = _LEADING_AT_RE.sub("", cleaned).strip()
    return cleaned or text


def score_confidence(amount_found: bool, category: str, description: str) -> float:
    confidence = BASE_CONFIDENCE
    if amount_found:
        confidence += 0.2
    if category != DEFAULT_CATEGORY:
        confidence += 0.1
    if len(description) > 3:
        confidence += 0.1
    return min(round(confidence, 2), 1.0)


def fallback_parse(text: str) -> ParsedTransaction:
    """
    Deterministic keyword/regex parse. Never fails for str input.
    Confidence is always within [0.6, 1.0].
    """
    amount, match = extract_amount(text)
    category = classify_category(text)
    txn_type = classify_type(text)
    description = clean_description(text)

    return ParsedTransaction(
        amount=amount,
        description=description,
        category=category,
        type=txn_type,
        confidence=score_confidence(match is not None, category, description),
    )
