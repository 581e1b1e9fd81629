"""icanhazdadjoke client — implements JokePort."""

import asyncio

import aiohttp

from dadbot import __version__
from dadbot.config import DEFAULT_JOKE_API_URL, DEFAULT_JOKE_TIMEOUT_SECONDS
from dadbot.ports.outbound import JokeResult

USER_AGENT = f"dadbot/{__version__}"


class JokeClient:
    """Fetches one random dad joke per call. Never raises."""

    def __init__(
        self,
        url: str = DEFAULT_JOKE_API_URL,
        timeout_seconds: float = DEFAULT_JOKE_TIMEOUT_SECONDS,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds

    async def fetch_joke(self) -> JokeResult:
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.url, headers=headers) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        body = await resp.text()
                        return JokeResult(success=False, error=f"HTTP {resp.status}: {body}")
                    data = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            return JokeResult(success=False, error=f"Timeout ({self.timeout_seconds:g}s)")
        except Exception as e:
            return JokeResult(success=False, error=str(e) or type(e).__name__)

        if not isinstance(data, dict) or not isinstance(data.get("joke"), str):
            return JokeResult(success=False, error=f"Malformed joke response: {data!r}")
        return JokeResult(success=True, joke=data["joke"])
