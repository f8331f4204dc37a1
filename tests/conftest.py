import json
from typing import Any, Callable, List

import httpx
import pytest

from finance_tracker.config import Settings
from finance_tracker.nlp.oracle_parser import OracleParser
from finance_tracker.nlp.transaction_parser import TransactionParser
from finance_tracker.utils.llm_client import LLMClient


def chat_completion(content: Any) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


class OracleStub:
    """Records requests and answers with a canned chat completion or a canned failure."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(OPENAI_API_KEY="")


@pytest.fixture
def online_settings() -> Settings:
    return Settings(OPENAI_API_KEY="sk-test", OPENAI_BASE_URL="https://oracle.test/v1")


@pytest.fixture
def oracle_replying(online_settings):
    """Build a TransactionParser whose oracle answers every call with ``content``."""

    def _build(content: Any = None, *, status: int = 200, body: Any = None, exc: Exception = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if body is not None:
                return httpx.Response(status, content=body)
            return httpx.Response(status, json=chat_completion(content))

        stub = OracleStub(handler)
        client = LLMClient(online_settings, transport=stub.transport)
        parser = TransactionParser(settings=online_settings, oracle=OracleParser(online_settings, client=client))
        return parser, stub

    return _build


@pytest.fixture
def answer() -> Callable[..., str]:
    def _answer(**overrides: Any) -> str:
        data = {
            "amount": 6.5,
            "description": "Coffee at Starbucks",
            "category": "Food & Dining",
            "type": "expense",
            "confidence": 0.95,
        }
        data.update(overrides)
        return json.dumps(data)

    return _answer
