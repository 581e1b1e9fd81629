"""Launcher — wires config, adapters and the router, then runs until stopped."""

import asyncio
import signal
import sys
from typing import Optional

from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.web.async_client import AsyncWebClient

from dadbot import __version__
from dadbot.adapters.jokes import JokeClient
from dadbot.adapters.llm import OpenAIAdapter
from dadbot.adapters.slack import SlackMessagingAdapter, SocketModeTransport
from dadbot.config import AppConfig, ConfigError
from dadbot.domain import ActionHandlers, DedupStore, EventRouter


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_router(
    config: AppConfig,
    transport: SocketModeTransport,
    web_client: AsyncWebClient,
) -> EventRouter:
    """Instantiate adapters and handlers around one router."""
    handlers = ActionHandlers(
        messaging=SlackMessagingAdapter(web_client),
        jokes=JokeClient(config.joke.url, config.joke.timeout_seconds),
        completion=OpenAIAdapter(config.openai.api_key, config.openai.model),
        version=__version__,
        model=config.openai.model,
    )
    return EventRouter(
        handlers,
        acknowledger=transport,
        dedup=DedupStore(max_entries=config.dedup_max_entries),
        debug=config.debug,
    )


def _install_signal_handlers(stop: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops have no signal handler support
            pass


async def run_bot(config: AppConfig, stop: Optional[asyncio.Event] = None) -> None:
    """Connect, consume events until `stop` is set or the stream ends."""
    stop = stop or asyncio.Event()
    web_client = AsyncWebClient(token=config.slack.bot_token)
    client = SocketModeClient(app_token=config.slack.app_token, web_client=web_client)
    transport = SocketModeTransport(client)
    router = build_router(config, transport, web_client)

    consumer = asyncio.create_task(router.run(transport.events()))
    consumer.add_done_callback(lambda _: stop.set())
    _install_signal_handlers(stop)

    try:
        await transport.connect()
        _log(f"dadbot {__version__} running (model={config.openai.model})")
        await stop.wait()
    finally:
        _log("Shutting down...")
        await transport.close()
        if not consumer.done():
            consumer.cancel()
        try:
            await consumer
        except asyncio.CancelledError:
            pass


def main() -> None:
    try:
        config = AppConfig.from_env().validate()
    except ConfigError as e:
        _log(f"Configuration error: {e}")
        sys.exit(1)
    try:
        asyncio.run(run_bot(config))
    except Exception as e:
        _log(f"dadbot crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
