"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass
class PostResult:
    """Result of posting one message."""

    success: bool
    ts: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ConversationResult:
    """Result of opening a one-to-one conversation."""

    success: bool
    channel_id: str = ""
    error: Optional[str] = None


@dataclass
class JokeResult:
    success: bool
    joke: str = ""
    error: Optional[str] = None


@dataclass
class SlashReply:
    """Slash command response, rendered as a section block with a button."""

    text: str
    button_label: str


@runtime_checkable
class MessagingPort(Protocol):
    """Interface for posting messages and opening conversations."""

    async def post_message(self, channel_id: str, text: str) -> PostResult: ...

    async def open_conversation(self, user_id: str) -> ConversationResult: ...


@runtime_checkable
class AcknowledgePort(Protocol):
    """Interface for acknowledging transport envelopes."""

    async def acknowledge(
        self, envelope_id: str, reply: Optional[SlashReply] = None
    ) -> None: ...


@runtime_checkable
class JokePort(Protocol):
    async def fetch_joke(self) -> JokeResult: ...


@runtime_checkable
class CompletionPort(Protocol):
    """Interface for chat completion backends. Raises on failure."""

    async def complete(self, prompt: str) -> str: ...
