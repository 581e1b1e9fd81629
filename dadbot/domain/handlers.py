"""Action handlers — one per intent, no framework dependencies.

Each handler performs at most one outbound lookup (joke, completion, or
conversation open) and posts one or two replies through the MessagingPort.
Post failures are logged and dropped; nothing here retries.
"""

import sys
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from dadbot.domain.models import Intent, IntentKind
from dadbot.ports.outbound import (
    CompletionPort,
    JokePort,
    MessagingPort,
    PostResult,
    SlashReply,
)

JOKE_FAILURE_PREFIX = "This is Not a Joke! "
COMPLETION_FAILURE_PREFIX = "ResponseError: "
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

GREETING_TEXT = "Oh, hello."
ABOUT_TEXT = "I am a chatbot designed to assist you with various tasks."
WEATHER_TEXT = "I'm sorry, I can't provide weather information."
WEATHER_SLASH_TEXT = "102 °F Temperatures are on the up!  the water is warm."
DM_RELAY_TEXT = "This is a direct message from the chat bot"


def _log(msg: str):
    print(msg, file=sys.stderr)


def format_time_reply(now: datetime) -> str:
    return "At the tone the time will be...\n" + now.strftime(TIME_FORMAT)


class ActionHandlers:
    """Executes classified intents against the outbound ports."""

    def __init__(
        self,
        messaging: MessagingPort,
        jokes: JokePort,
        completion: CompletionPort,
        version: str = "",
        model: str = "",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._messaging = messaging
        self._jokes = jokes
        self._completion = completion
        self._version = version
        self._model = model
        self._clock = clock or datetime.now
        self._dispatch: Dict[IntentKind, Callable[[Intent, str], Awaitable[None]]] = {
            IntentKind.JOKE: self.joke,
            IntentKind.JOKE_TO_CHANNEL: self.joke_to_channel,
            IntentKind.JOKE_TO_USER: self.joke_to_user,
            IntentKind.DM_RELAY: self.dm_relay,
            IntentKind.CUSTOM_DM: self.custom_dm,
            IntentKind.TIME: self.time,
            IntentKind.WEATHER: self.weather,
            IntentKind.VERSION: self.version,
            IntentKind.GREETING: self.greeting,
            IntentKind.ABOUT: self.about,
            IntentKind.OPENAI: self.completion,
            IntentKind.FALLBACK: self.completion,
        }

    async def handle(self, intent: Intent, reply_channel: str) -> None:
        await self._dispatch[intent.kind](intent, reply_channel)

    # -- Helpers --

    async def _post(self, channel_id: str, text: str) -> PostResult:
        result = await self._messaging.post_message(channel_id, text)
        if not result.success:
            _log(f"[handlers] failed posting message to {channel_id!r}: {result.error}")
        return result

    async def _joke_text(self) -> str:
        result = await self._jokes.fetch_joke()
        if result.success:
            return result.joke
        return JOKE_FAILURE_PREFIX + (result.error or "unknown error")

    async def _completion_text(self, prompt: str) -> str:
        try:
            return await self._completion.complete(prompt)
        except Exception as e:
            _log(f"[handlers] completion error: {e}")
            return COMPLETION_FAILURE_PREFIX + str(e)

    async def _open_dm(self, user_id: str) -> Optional[str]:
        result = await self._messaging.open_conversation(user_id)
        if not result.success:
            _log(f"[handlers] failed opening conversation with {user_id!r}: {result.error}")
            return None
        return result.channel_id

    # -- Message intents --

    async def joke(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, await self._joke_text())

    async def joke_to_channel(self, intent: Intent, reply_channel: str) -> None:
        text = await self._joke_text()
        sent = await self._post(intent.channel_id, text)
        if sent.success:
            await self._post(reply_channel, "Told joke: " + text)

    async def joke_to_user(self, intent: Intent, reply_channel: str) -> None:
        dm_channel = await self._open_dm(intent.user_id)
        if dm_channel is None:
            return
        text = await self._joke_text()
        sent = await self._post(dm_channel, text)
        if sent.success:
            await self._post(reply_channel, "Told the joke " + text)

    async def dm_relay(self, intent: Intent, reply_channel: str) -> None:
        dm_channel = await self._open_dm(intent.user_id)
        if dm_channel is None:
            return
        sent = await self._post(dm_channel, DM_RELAY_TEXT)
        if sent.success:
            await self._post(reply_channel, "Message Sent!")

    async def custom_dm(self, intent: Intent, reply_channel: str) -> None:
        dm_channel = await self._open_dm(intent.user_id)
        if dm_channel is None:
            return
        sent = await self._post(dm_channel, intent.body)
        if sent.success:
            await self._post(reply_channel, "Sent.")

    async def time(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, format_time_reply(self._clock()))

    async def weather(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, WEATHER_TEXT)

    async def version(self, intent: Intent, reply_channel: str) -> None:
        text = (
            f"I'm bot version {self._version} using {self._model} "
            "and an expert rules engine."
        )
        await self._post(reply_channel, text)

    async def greeting(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, GREETING_TEXT)

    async def about(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, ABOUT_TEXT)

    async def completion(self, intent: Intent, reply_channel: str) -> None:
        await self._post(reply_channel, await self._completion_text(intent.prompt))

    async def mention(self, channel_id: str) -> None:
        await self._post(channel_id, GREETING_TEXT)

    # -- Slash commands --

    async def slash_dadjoke(self, text: str) -> SlashReply:
        return SlashReply(text=await self._joke_text(), button_label="bar")

    async def slash_weather(self, text: str) -> SlashReply:
        return SlashReply(text=WEATHER_SLASH_TEXT, button_label="wet bar")

    async def slash_openai(self, text: str) -> SlashReply:
        return SlashReply(text=await self._completion_text(text), button_label="openai")
