"""Socket Mode request decoding — raw envelopes to inbound Events.

Pure Python; the transport hands over (type, envelope_id, payload) and gets
back exactly one Event. Nothing here raises on malformed input.
"""

from typing import Any, Dict, Optional

from dadbot.ports.inbound import (
    AppMentionEvent,
    CallbackEvent,
    Event,
    InnerEvent,
    InteractiveEvent,
    MemberJoinedEvent,
    MessageEvent,
    SlashCommandEvent,
    UnsupportedEvent,
)

EVENTS_API = "events_api"
INTERACTIVE = "interactive"
SLASH_COMMANDS = "slash_commands"

EVENT_CALLBACK = "event_callback"
BOT_MESSAGE_SUBTYPE = "bot_message"


def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def decode_message(event: Dict[str, Any]) -> MessageEvent:
    # message_changed and message_deleted nest the affected message
    nested = event.get("message")
    nested_bot = isinstance(nested, dict) and bool(nested.get("bot_id"))
    return MessageEvent(
        channel_id=_str(event, "channel"),
        user_id=_str(event, "user"),
        text=_str(event, "text"),
        # edited or system messages lack client_msg_id; ts is unique per channel
        message_id=_str(event, "client_msg_id") or _str(event, "ts"),
        channel_type=_str(event, "channel_type"),
        is_bot=(
            bool(event.get("bot_id"))
            or nested_bot
            or event.get("subtype") == BOT_MESSAGE_SUBTYPE
        ),
        subtype=_str(event, "subtype"),
    )


def decode_inner_event(event: Dict[str, Any]) -> Optional[InnerEvent]:
    inner_type = _str(event, "type")
    if inner_type == "message":
        return decode_message(event)
    if inner_type == "app_mention":
        return AppMentionEvent(
            channel_id=_str(event, "channel"),
            user_id=_str(event, "user"),
            text=_str(event, "text"),
        )
    if inner_type == "member_joined_channel":
        return MemberJoinedEvent(
            channel_id=_str(event, "channel"),
            user_id=_str(event, "user"),
        )
    return None


def decode_request(request_type: str, envelope_id: str, payload: Any) -> Event:
    """Decode one Socket Mode request into an Event."""
    envelope_id = envelope_id or ""
    if not isinstance(payload, dict):
        return UnsupportedEvent(envelope_id, request_type, reason="payload is not an object")

    if request_type == EVENTS_API:
        if payload.get("type") != EVENT_CALLBACK:
            return UnsupportedEvent(
                envelope_id, request_type, reason=f"events api type {payload.get('type')!r}"
            )
        event = payload.get("event")
        if not isinstance(event, dict):
            return UnsupportedEvent(envelope_id, request_type, reason="callback without event")
        return CallbackEvent(
            envelope_id=envelope_id,
            inner_type=_str(event, "type"),
            inner=decode_inner_event(event),
        )

    if request_type == INTERACTIVE:
        return InteractiveEvent(
            envelope_id=envelope_id,
            interaction_type=_str(payload, "type"),
            payload=payload,
        )

    if request_type == SLASH_COMMANDS:
        return SlashCommandEvent(
            envelope_id=envelope_id,
            command=_str(payload, "command"),
            text=_str(payload, "text"),
            channel_id=_str(payload, "channel_id"),
            user_id=_str(payload, "user_id"),
        )

    return UnsupportedEvent(envelope_id, request_type, reason="unknown request type")
