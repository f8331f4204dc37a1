"""
cli.py
------
Parse a free-text transaction from the command line and print it as JSON.

    finance-tracker-parse "Coffee at Starbucks $6.50"
    finance-tracker-parse --offline "Salary deposit $3500"
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from finance_tracker.config import get_settings
from finance_tracker.nlp.transaction_parser import TransactionParser, parse_transaction_sync


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="finance-tracker-parse", description="Parse a free-text transaction into JSON")
    p.add_argument("text", nargs="+", help="Transaction description, e.g. 'Gas $45.20'")
    p.add_argument("--offline", action="store_true", help="Skip the language model and use keyword rules only")
    p.add_argument("--log-level", default=None, help="Log level for stderr (default: LOG_LEVEL env or INFO)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = get_settings()
    if args.offline:
        settings = settings.model_copy(update={"OPENAI_API_KEY": ""})

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or settings.LOG_LEVEL).upper())

    text = " ".join(args.text)
    if not text.strip():
        print("error: Input text is required", file=sys.stderr)
        return 2

    result = parse_transaction_sync(text, parser=TransactionParser(settings=settings))
    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
