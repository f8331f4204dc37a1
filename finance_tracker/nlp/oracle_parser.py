"""Language-model tier of the transaction interpreter.

``OracleParser.parse`` always returns a ``ParsedTransaction``. Every way the
oracle can fail (no key, transport error, non-JSON answer, schema violation)
ends in the deterministic fallback parser, decided in one place.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from loguru import logger
from pydantic import ValidationError

from finance_tracker.config import Settings
from finance_tracker.errors import OracleError, OracleSchemaViolation, OracleUnconfigured
from finance_tracker.models.transaction import ParsedTransaction
from finance_tracker.nlp.fallback_parser import fallback_parse
from finance_tracker.nlp.taxonomy import CATEGORIES, TRANSACTION_TYPES, is_valid_category, is_valid_type
from finance_tracker.utils.llm_client import LLMClient


_PROMPT_TEMPLATE = """
Parse this financial transaction description into structured data. Return ONLY a JSON object with no additional text.

Input: "{text}"

Extract:
- amount: number (dollar amount, no currency symbol)
- description: string (cleaned transaction description)
- category: string (must be one of: {categories})
- type: string ("income" or "expense")
- confidence: number (0.0 to 1.0, how confident you are in the parsing)

Examples:
"Coffee at Starbucks $6.50" → {{"amount": 6.50, "description": "Coffee at Starbucks", "category": "Food & Dining", "type": "expense", "confidence": 0.95}}
"Salary deposit $3500" → {{"amount": 3500, "description": "Salary deposit", "category": "Income", "type": "income", "confidence": 0.98}}
"Gas $45.20" → {{"amount": 45.20, "description": "Gas", "category": "Transportation", "type": "expense", "confidence": 0.90}}

Return only the JSON object:"""

_STRING_FIELDS = ("description", "category", "type")
_NUMBER_FIELDS = ("amount", "confidence")


def build_prompt(text: str) -> str:
    return _PROMPT_TEMPLATE.format(text=text, categories=", ".join(CATEGORIES))


def _is_number(v: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def validate_payload(payload: Any) -> Dict[str, Any]:
    """Reject anything but an exact match of the answer contract."""
    if not isinstance(payload, dict):
        raise OracleSchemaViolation(f"expected a JSON object, got {type(payload).__name__}")
    for name in _NUMBER_FIELDS:
        if not _is_number(payload.get(name)):
            raise OracleSchemaViolation(f"{name} must be a number")
    for name in _STRING_FIELDS:
        if not isinstance(payload.get(name), str):
            raise OracleSchemaViolation(f"{name} must be a string")
    if not is_valid_category(payload["category"]):
        raise OracleSchemaViolation(f"category {payload['category']!r} not in taxonomy")
    if not is_valid_type(payload["type"]):
        raise OracleSchemaViolation(f"type must be one of {TRANSACTION_TYPES}")
    if not payload["description"].strip():
        raise OracleSchemaViolation("description is blank")
    return payload


def normalize_payload(payload: Dict[str, Any]) -> ParsedTransaction:
    try:
        amount = abs(float(payload["amount"]))
        confidence = float(payload["confidence"])
        if not (math.isfinite(amount) and math.isfinite(confidence)):
            raise OracleSchemaViolation("amount and confidence must be finite")
        return ParsedTransaction(
            amount=amount,
            description=payload["description"].strip(),
            category=payload["category"],
            type=payload["type"],
            confidence=max(0.0, min(1.0, confidence)),
        )
    except (OverflowError, ValidationError) as e:
        # JSON integers too large for a float
        raise OracleSchemaViolation(str(e)) from e


@dataclass(frozen=True)
class OracleAttempt:
    """Outcome of one oracle call: a transaction or the failure that prevented it."""

    transaction: Optional[ParsedTransaction] = None
    failure: Optional[OracleError] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


class OracleParser:
    def __init__(
        self,
        settings: Settings,
        client: Optional[LLMClient] = None,
        fallback: Callable[[str], ParsedTransaction] = fallback_parse,
    ) -> None:
        self.settings = settings
        self.client = client or LLMClient(settings)
        self.fallback = fallback

    async def attempt(self, text: str) -> OracleAttempt:
        if not self.settings.oracle_configured:
            return OracleAttempt(failure=OracleUnconfigured("OPENAI_API_KEY not set"))
        try:
            payload = await self.client.complete_json(build_prompt(text))
            return OracleAttempt(transaction=normalize_payload(validate_payload(payload)))
        except OracleError as e:
            return OracleAttempt(failure=e)

    async def parse(self, text: str) -> ParsedTransaction:
        attempt = await self.attempt(text)
        if attempt.ok:
            return attempt.transaction

        failure = attempt.failure
        if isinstance(failure, OracleUnconfigured):
            logger.info("OpenAI API key not configured, using fallback parser")
        else:
            logger.warning("Oracle parse failed kind={} err={}; using fallback parser", failure.kind, failure.detail)
        return self.fallback(text)
