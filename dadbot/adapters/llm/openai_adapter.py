"""OpenAI chat completion adapter — implements CompletionPort."""

import sys
from datetime import datetime
from typing import Any, Optional

from openai import AsyncOpenAI

from dadbot.config import DEFAULT_OPENAI_MODEL


class CompletionError(Exception):
    """Raised when the completion API answers without usable content."""


class OpenAIAdapter:
    """Single-turn chat completions. Errors propagate to the caller."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        client: Optional[Any] = None,
    ):
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key)

    async def complete(self, prompt: str) -> str:
        print(f"[{datetime.now().isoformat()}] Requesting completion from {self.model}", file=sys.stderr)
        resp = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not resp.choices:
            raise CompletionError("completion returned no choices")
        return resp.choices[0].message.content or ""
