"""Port interfaces (Hexagonal Architecture)."""

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
from dadbot.ports.outbound import (
    AcknowledgePort,
    CompletionPort,
    ConversationResult,
    JokePort,
    JokeResult,
    MessagingPort,
    PostResult,
    SlashReply,
)

__all__ = [
    "AppMentionEvent",
    "CallbackEvent",
    "Event",
    "InteractiveEvent",
    "LifecycleEvent",
    "MemberJoinedEvent",
    "MessageEvent",
    "SlashCommandEvent",
    "UnsupportedEvent",
    "AcknowledgePort",
    "CompletionPort",
    "ConversationResult",
    "JokePort",
    "JokeResult",
    "MessagingPort",
    "PostResult",
    "SlashReply",
]
