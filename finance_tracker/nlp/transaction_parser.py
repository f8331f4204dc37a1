from __future__ import annotations

import asyncio
from typing import Optional

from finance_tracker.config import Settings, get_settings
from finance_tracker.errors import InvalidTransactionInput
from finance_tracker.models.transaction import ParsedTransaction
from finance_tracker.nlp.oracle_parser import OracleParser


class TransactionParser:
    """
    Single entry point for turning free text into a ParsedTransaction.
    Tier selection and fallback live in OracleParser; this only guards input.
    """

    def __init__(self, settings: Optional[Settings] = None, oracle: Optional[OracleParser] = None) -> None:
        self.settings = settings or get_settings()
        self.oracle = oracle or OracleParser(self.settings)

    async def parse(self, text: str) -> ParsedTransaction:
        if not isinstance(text, str):
            raise InvalidTransactionInput(text)
        return await self.oracle.parse(text)


_default_parser: Optional[TransactionParser] = None


def get_parser() -> TransactionParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = TransactionParser()
    return _default_parser


async def parse_transaction(text: str) -> ParsedTransaction:
    return await get_parser().parse(text)


def parse_transaction_sync(text: str, parser: Optional[TransactionParser] = None) -> ParsedTransaction:
    return asyncio.run((parser or get_parser()).parse(text))
