"""EventRouter — acknowledges events and dispatches them to handlers.

Handles:
- Lifecycle notices (log only)
- Events API callbacks: direct messages, app mentions, member joins
- Interactive payloads (ack with empty payload)
- Slash commands (ack carries the block reply)

Per-event failures come back as RouteOutcome values; `run` logs them and
keeps consuming.
"""

import sys
from typing import AsyncIterable, Awaitable, Callable, Dict, Optional

from dadbot.domain.classifier import classify
from dadbot.domain.dedup import DedupStore
from dadbot.domain.handlers import ActionHandlers
from dadbot.domain.models import Intent, RouteOutcome
from dadbot.ports.inbound import (
    AppMentionEvent,
    CallbackEvent,
    Event,
    InteractiveEvent,
    LifecycleEvent,
    MemberJoinedEvent,
    MessageEvent,
    SlashCommandEvent,
    UnsupportedEvent,
)
from dadbot.ports.outbound import AcknowledgePort, SlashReply

BLOCK_ACTIONS = "block_actions"


def _log(msg: str):
    print(msg, file=sys.stderr)


LIFECYCLE_MESSAGES = {
    "connecting": "Connecting... to Slack with Socket Mode...",
    "connected": "Connected to Slack with Socket Mode.",
    "connection_error": "Connection failed. Retrying later...",
    "disconnected": "Disconnected from Slack.",
}


class EventRouter:
    """Single-consumer event dispatcher. Owns the DedupStore."""

    def __init__(
        self,
        handlers: ActionHandlers,
        acknowledger: AcknowledgePort,
        dedup: Optional[DedupStore] = None,
        classifier: Callable[[str], Intent] = classify,
        debug: bool = False,
    ):
        self._handlers = handlers
        self._ack = acknowledger
        self.dedup = dedup if dedup is not None else DedupStore()
        self._classify = classifier
        self._debug = debug
        self._slash_commands: Dict[str, Callable[[str], Awaitable[SlashReply]]] = {
            "/dadjoke": handlers.slash_dadjoke,
            "/weather": handlers.slash_weather,
            "/openai": handlers.slash_openai,
        }

    async def run(self, events: AsyncIterable[Event]) -> int:
        """Consume events one at a time until the source is exhausted."""
        count = 0
        async for event in events:
            outcome = await self.dispatch(event)
            count += 1
            if outcome.failed:
                _log(f"[router] {outcome.kind} event failed: {outcome.error}")
        return count

    async def dispatch(self, event: Event) -> RouteOutcome:
        """Route one event; an escaping exception becomes an error outcome."""
        try:
            return await self.route(event)
        except Exception as e:
            return RouteOutcome(
                kind=type(event).__name__, error=f"{type(e).__name__}: {e}"
            )

    async def route(self, event: Event) -> RouteOutcome:
        if event is None:
            _log("[router] received empty event, skipping")
            return RouteOutcome(kind="empty", detail="skipped")
        if self._debug:
            _log(f"[router] event: {event!r}")

        if isinstance(event, LifecycleEvent):
            return self._on_lifecycle(event)
        if isinstance(event, CallbackEvent):
            await self._ack.acknowledge(event.envelope_id)
            return await self._on_callback(event)
        if isinstance(event, InteractiveEvent):
            return await self._on_interactive(event)
        if isinstance(event, SlashCommandEvent):
            return await self._on_slash_command(event)
        if isinstance(event, UnsupportedEvent):
            await self._ack.acknowledge(event.envelope_id)
            _log(f"[router] ignored {event.request_type} request: {event.reason}")
            return RouteOutcome(kind="unsupported", detail=event.reason)

        _log(f"[router] ignored {event!r}")
        return RouteOutcome(kind="unknown", detail="skipped")

    # -- Categories --

    def _on_lifecycle(self, event: LifecycleEvent) -> RouteOutcome:
        message = LIFECYCLE_MESSAGES.get(event.state, f"Connection state: {event.state}")
        if event.detail:
            message = f"{message} ({event.detail})"
        _log(f"[socket] {message}")
        return RouteOutcome(kind="lifecycle", detail=event.state)

    async def _on_callback(self, event: CallbackEvent) -> RouteOutcome:
        inner = event.inner
        if isinstance(inner, MessageEvent):
            return await self._on_message(inner)
        if isinstance(inner, AppMentionEvent):
            _log(f"[router] we have been mentioned in {inner.channel_id}")
            await self._handlers.mention(inner.channel_id)
            return RouteOutcome(kind="app_mention", handled=True)
        if isinstance(inner, MemberJoinedEvent):
            _log(f"[router] user {inner.user_id!r} joined to channel {inner.channel_id!r}")
            return RouteOutcome(kind="member_joined_channel")
        if self._debug:
            _log(f"[router] unsupported Events API event received: {event.inner_type}")
        return RouteOutcome(kind="callback", detail=event.inner_type)

    async def _on_message(self, message: MessageEvent) -> RouteOutcome:
        if not message.is_direct or not message.is_user_post:
            return RouteOutcome(kind="message", detail="not a direct message from a user")

        _log(f"[router] direct message in {message.channel_id}")
        if not await self.dedup.claim(message.message_id):
            return RouteOutcome(kind="message", detail="duplicate")

        try:
            intent = self._classify(message.text)
            await self._handlers.handle(intent, message.channel_id)
        except Exception:
            await self.dedup.release(message.message_id)
            raise
        return RouteOutcome(kind="message", handled=True, detail=intent.kind.value)

    async def _on_interactive(self, event: InteractiveEvent) -> RouteOutcome:
        await self._ack.acknowledge(event.envelope_id)
        if self._debug:
            _log(f"[router] interaction received: {event.payload!r}")
        if event.interaction_type == BLOCK_ACTIONS:
            _log("[router] button clicked!")
        return RouteOutcome(kind="interactive", detail=event.interaction_type)

    async def _on_slash_command(self, event: SlashCommandEvent) -> RouteOutcome:
        if self._debug:
            _log(f"[router] slash command received: {event!r}")
        handler = self._slash_commands.get(event.command)
        if handler is None:
            _log(f"[router] ignored slash command {event.command!r}")
            await self._ack.acknowledge(event.envelope_id)
            return RouteOutcome(kind="slash_command", detail="unknown command")

        reply = await handler(event.text)
        await self._ack.acknowledge(event.envelope_id, reply)
        return RouteOutcome(kind="slash_command", handled=True, detail=event.command)
