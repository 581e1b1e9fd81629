"""Tests for domain/handlers.py — ActionHandlers with mock ports only."""

import re
from datetime import datetime

import pytest

from dadbot.domain.handlers import (
    ABOUT_TEXT,
    DM_RELAY_TEXT,
    GREETING_TEXT,
    WEATHER_SLASH_TEXT,
    WEATHER_TEXT,
    ActionHandlers,
    format_time_reply,
)
from dadbot.domain.models import Intent, IntentKind
from dadbot.ports.outbound import ConversationResult, JokeResult, PostResult, SlashReply


TIME_REPLY_RE = re.compile(
    r"^At the tone the time will be...\n\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"
)


# --- Mock Ports ---


class MockMessaging:
    """Mock MessagingPort recording every call."""

    def __init__(self, fail_channels=(), fail_open=False):
        self.sent = []
        self.opened = []
        self._fail_channels = set(fail_channels)
        self._fail_open = fail_open

    async def post_message(self, channel_id, text):
        if channel_id in self._fail_channels:
            return PostResult(success=False, error="channel_not_found")
        self.sent.append((channel_id, text))
        return PostResult(success=True, ts="1.0")

    async def open_conversation(self, user_id):
        self.opened.append(user_id)
        if self._fail_open:
            return ConversationResult(success=False, error="user_not_found")
        return ConversationResult(success=True, channel_id=f"D-{user_id}")


class MockJokes:
    def __init__(self, joke="Why did the scarecrow win? He was outstanding.", error=None):
        self.joke = joke
        self.error = error
        self.calls = 0

    async def fetch_joke(self):
        self.calls += 1
        if self.error:
            return JokeResult(success=False, error=self.error)
        return JokeResult(success=True, joke=self.joke)


class MockCompletion:
    def __init__(self, response="mock completion", error=None):
        self.response = response
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response


# --- Helpers ---


def _make_handlers(messaging=None, jokes=None, completion=None, clock=None):
    messaging = messaging or MockMessaging()
    jokes = jokes or MockJokes()
    completion = completion or MockCompletion()
    handlers = ActionHandlers(
        messaging=messaging,
        jokes=jokes,
        completion=completion,
        version="1.0.0",
        model="gpt-test",
        clock=clock,
    )
    return handlers, messaging, jokes, completion


class TestJoke:
    @pytest.mark.asyncio
    async def test_posts_joke_to_reply_channel(self):
        handlers, messaging, jokes, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.JOKE), "D1")
        assert messaging.sent == [("D1", jokes.joke)]

    @pytest.mark.asyncio
    async def test_failure_prefix(self):
        handlers, messaging, _, _ = _make_handlers(jokes=MockJokes(error="HTTP 500: boom"))
        await handlers.handle(Intent(IntentKind.JOKE), "D1")
        assert len(messaging.sent) == 1
        assert messaging.sent[0][1].startswith("This is Not a Joke! ")
        assert "HTTP 500" in messaging.sent[0][1]


class TestJokeToChannel:
    @pytest.mark.asyncio
    async def test_posts_to_target_then_confirms(self):
        handlers, messaging, jokes, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.JOKE_TO_CHANNEL, channel_id="C123"), "D1")
        assert messaging.sent == [
            ("C123", jokes.joke),
            ("D1", "Told joke: " + jokes.joke),
        ]

    @pytest.mark.asyncio
    async def test_no_confirmation_when_target_post_fails(self):
        messaging = MockMessaging(fail_channels={""})
        handlers, _, _, _ = _make_handlers(messaging=messaging)
        await handlers.handle(Intent(IntentKind.JOKE_TO_CHANNEL, channel_id=""), "D1")
        assert messaging.sent == []

    @pytest.mark.asyncio
    async def test_failure_text_goes_to_target(self):
        handlers, messaging, _, _ = _make_handlers(jokes=MockJokes(error="timeout"))
        await handlers.handle(Intent(IntentKind.JOKE_TO_CHANNEL, channel_id="C1"), "D1")
        assert messaging.sent[0] == ("C1", "This is Not a Joke! timeout")


class TestRelays:
    @pytest.mark.asyncio
    async def test_dm_relay(self):
        handlers, messaging, _, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.DM_RELAY, user_id="U999"), "D1")
        assert messaging.opened == ["U999"]
        assert messaging.sent == [("D-U999", DM_RELAY_TEXT), ("D1", "Message Sent!")]

    @pytest.mark.asyncio
    async def test_custom_dm(self):
        handlers, messaging, _, _ = _make_handlers()
        intent = Intent(IntentKind.CUSTOM_DM, user_id="U1", body="Lunch is ready")
        await handlers.handle(intent, "D1")
        assert messaging.sent == [("D-U1", "Lunch is ready"), ("D1", "Sent.")]

    @pytest.mark.asyncio
    async def test_joke_to_user(self):
        handlers, messaging, jokes, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.JOKE_TO_USER, user_id="U2"), "D1")
        assert messaging.sent == [("D-U2", jokes.joke), ("D1", "Told the joke " + jokes.joke)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", [
        IntentKind.DM_RELAY,
        IntentKind.CUSTOM_DM,
        IntentKind.JOKE_TO_USER,
    ])
    async def test_open_failure_posts_nothing(self, kind):
        messaging = MockMessaging(fail_open=True)
        jokes = MockJokes()
        handlers, _, _, _ = _make_handlers(messaging=messaging, jokes=jokes)
        await handlers.handle(Intent(kind, user_id="Ubad", body="hi"), "D1")
        assert messaging.sent == []
        assert jokes.calls == 0

    @pytest.mark.asyncio
    async def test_relay_post_failure_skips_confirmation(self):
        messaging = MockMessaging(fail_channels={"D-U3"})
        handlers, _, _, _ = _make_handlers(messaging=messaging)
        await handlers.handle(Intent(IntentKind.DM_RELAY, user_id="U3"), "D1")
        assert messaging.sent == []


class TestCanned:
    @pytest.mark.asyncio
    async def test_time_format(self):
        handlers, messaging, _, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.TIME), "D1")
        assert TIME_REPLY_RE.match(messaging.sent[0][1])

    @pytest.mark.asyncio
    async def test_time_uses_clock(self):
        clock = lambda: datetime(2023, 10, 6, 9, 5, 3)
        handlers, messaging, _, _ = _make_handlers(clock=clock)
        await handlers.handle(Intent(IntentKind.TIME), "D1")
        assert messaging.sent[0][1].endswith("2023-10-06 09:05:03")

    def test_format_time_reply(self):
        text = format_time_reply(datetime(2024, 1, 2, 3, 4, 5))
        assert text == "At the tone the time will be...\n2024-01-02 03:04:05"

    @pytest.mark.asyncio
    async def test_version(self):
        handlers, messaging, _, _ = _make_handlers()
        await handlers.handle(Intent(IntentKind.VERSION), "D1")
        text = messaging.sent[0][1]
        assert "1.0.0" in text
        assert "gpt-test" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind,expected", [
        (IntentKind.WEATHER, WEATHER_TEXT),
        (IntentKind.GREETING, GREETING_TEXT),
        (IntentKind.ABOUT, ABOUT_TEXT),
    ])
    async def test_fixed_replies(self, kind, expected):
        handlers, messaging, _, _ = _make_handlers()
        await handlers.handle(Intent(kind), "D1")
        assert messaging.sent == [("D1", expected)]

    @pytest.mark.asyncio
    async def test_mention_greets(self):
        handlers, messaging, _, _ = _make_handlers()
        await handlers.mention("C9")
        assert messaging.sent == [("C9", GREETING_TEXT)]


class TestCompletion:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", [IntentKind.OPENAI, IntentKind.FALLBACK])
    async def test_posts_completion(self, kind):
        handlers, messaging, _, completion = _make_handlers()
        await handlers.handle(Intent(kind, prompt="tell me about your day"), "D1")
        assert completion.prompts == ["tell me about your day"]
        assert messaging.sent == [("D1", "mock completion")]

    @pytest.mark.asyncio
    async def test_error_reply(self):
        completion = MockCompletion(error=RuntimeError("invalid api key"))
        handlers, messaging, _, _ = _make_handlers(completion=completion)
        await handlers.handle(Intent(IntentKind.FALLBACK, prompt="hi there"), "D1")
        assert messaging.sent == [("D1", "ResponseError: invalid api key")]

    @pytest.mark.asyncio
    async def test_post_failure_is_swallowed(self):
        messaging = MockMessaging(fail_channels={"D1"})
        handlers, _, _, _ = _make_handlers(messaging=messaging)
        await handlers.handle(Intent(IntentKind.FALLBACK, prompt="x"), "D1")
        assert messaging.sent == []


class TestSlashCommands:
    @pytest.mark.asyncio
    async def test_dadjoke(self):
        handlers, messaging, jokes, _ = _make_handlers()
        reply = await handlers.slash_dadjoke("")
        assert reply == SlashReply(text=jokes.joke, button_label="bar")
        assert messaging.sent == []

    @pytest.mark.asyncio
    async def test_dadjoke_failure(self):
        handlers, _, _, _ = _make_handlers(jokes=MockJokes(error="down"))
        reply = await handlers.slash_dadjoke("")
        assert reply.text == "This is Not a Joke! down"

    @pytest.mark.asyncio
    async def test_weather(self):
        handlers, _, _, _ = _make_handlers()
        reply = await handlers.slash_weather("Copenhagen")
        assert reply == SlashReply(text=WEATHER_SLASH_TEXT, button_label="wet bar")

    @pytest.mark.asyncio
    async def test_openai_uses_command_text(self):
        handlers, _, _, completion = _make_handlers()
        reply = await handlers.slash_openai("what is a monad")
        assert completion.prompts == ["what is a monad"]
        assert reply == SlashReply(text="mock completion", button_label="openai")

    @pytest.mark.asyncio
    async def test_openai_error(self):
        completion = MockCompletion(error=ValueError("rate limited"))
        handlers, _, _, _ = _make_handlers(completion=completion)
        reply = await handlers.slash_openai("q")
        assert reply.text == "ResponseError: rate limited"


class TestDispatchTable:
    def test_every_intent_has_a_handler(self):
        handlers, _, _, _ = _make_handlers()
        assert set(handlers._dispatch) == set(IntentKind)
