"""Inbound port — events decoded once at the transport boundary.

Every event the router sees is one of the dataclasses below. The Slack adapter
builds them from raw Socket Mode requests; tests build them directly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

DIRECT_CHANNEL_TYPE = "im"

# Subtypes that still mean a person posted new text; edit and delete notices
# carry other subtypes.
USER_MESSAGE_SUBTYPES = frozenset({"", "file_share", "thread_broadcast"})

# Lifecycle states reported by the transport
CONNECTING = "connecting"
CONNECTED = "connected"
CONNECTION_ERROR = "connection_error"
DISCONNECTED = "disconnected"


@dataclass
class LifecycleEvent:
    """Connection state change. Has no envelope and is never acknowledged."""

    state: str
    detail: str = ""


@dataclass
class MessageEvent:
    channel_id: str
    user_id: str
    text: str
    message_id: str
    channel_type: str = ""
    is_bot: bool = False
    subtype: str = ""

    @property
    def is_direct(self) -> bool:
        return self.channel_type == DIRECT_CHANNEL_TYPE

    @property
    def is_user_post(self) -> bool:
        return not self.is_bot and self.subtype in USER_MESSAGE_SUBTYPES


@dataclass
class AppMentionEvent:
    channel_id: str
    user_id: str
    text: str


@dataclass
class MemberJoinedEvent:
    channel_id: str
    user_id: str


InnerEvent = Union[MessageEvent, AppMentionEvent, MemberJoinedEvent]


@dataclass
class CallbackEvent:
    """Events API callback. `inner` is None for inner types we do not handle."""

    envelope_id: str
    inner_type: str
    inner: Optional[InnerEvent] = None


@dataclass
class InteractiveEvent:
    envelope_id: str
    interaction_type: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SlashCommandEvent:
    envelope_id: str
    command: str
    text: str = ""
    channel_id: str = ""
    user_id: str = ""


@dataclass
class UnsupportedEvent:
    """A request the bot cannot decode. Still acknowledged, then skipped."""

    envelope_id: str
    request_type: str
    reason: str = ""


Event = Union[
    LifecycleEvent,
    CallbackEvent,
    InteractiveEvent,
    SlashCommandEvent,
    UnsupportedEvent,
]
