import json
import time
from typing import Any, Optional

import httpx
from loguru import logger

from finance_tracker.config import Settings
from finance_tracker.errors import OracleMalformedResponse, OracleTransportFailure, OracleUnconfigured


MAX_TOKENS = 150
TEMPERATURE = 0.1


def _strip_fences(text: str) -> str:
    t = text.strip()
    if t.startswith("```"):
        # remove ```json / ``` and trailing ```
        t = t.split("\n", 1)[1] if "\n" in t else ""
        if t.rstrip().endswith("```"):
            t = t.rstrip()[: -3]
    return t.strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite JSON literal {name}")


def loads_json(text: str) -> Any:
    """Decode a single JSON value from an oracle answer, tolerating markdown fences only."""
    try:
        return json.loads(_strip_fences(text), parse_constant=_reject_constant)
    except ValueError as e:
        raise OracleMalformedResponse(f"oracle answer is not JSON: {e}") from e


class LLMClient:
    """
    OpenAI-compatible chat-completions wrapper.

    complete(prompt: str) -> str
    - one request per call, no retries
    - a fresh AsyncClient per call, closed before returning
    - every failure is raised as an OracleError subclass
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        self.model = settings.OPENAI_MODEL
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        if not self.settings.oracle_configured:
            raise OracleUnconfigured("OPENAI_API_KEY not set")

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }
        headers = {
            "Authorization": f"Bearer {self.settings.OPENAI_API_KEY}",
            "content-type": "application/json",
        }
        url = self.settings.OPENAI_BASE_URL.rstrip("/") + "/chat/completions"

        logger.info("Oracle call model={}", self.model)
        t0 = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.settings.OPENAI_TIMEOUT_S, transport=self._transport) as client:
                resp = await client.post(url, headers=headers, json=payload)
                resp.raise_for_status()
        # UnicodeEncodeError: headers must be ASCII, so a pasted non-ASCII key fails here
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise OracleTransportFailure(f"{type(e).__name__}: {e}") from e

        try:
            msg = resp.json()
        except ValueError as e:
            raise OracleMalformedResponse("response body is not JSON") from e

        out = self._message_content(msg)
        logger.info("Oracle response chars={} latency_s={:.2f}", len(out), time.time() - t0)
        return out.strip()

    async def complete_json(self, prompt: str) -> Any:
        return loads_json(await self.complete(prompt))

    @staticmethod
    def _message_content(msg: Any) -> str:
        try:
            content = msg["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise OracleMalformedResponse("response has no choices[0].message.content") from e
        if not isinstance(content, str):
            raise OracleMalformedResponse("message content is not text")
        return content
