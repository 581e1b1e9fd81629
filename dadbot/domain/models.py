"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IntentKind(str, Enum):
    JOKE = "joke"
    JOKE_TO_CHANNEL = "joke_to_channel"
    JOKE_TO_USER = "joke_to_user"
    DM_RELAY = "dm_relay"
    CUSTOM_DM = "custom_dm"
    TIME = "time"
    WEATHER = "weather"
    VERSION = "version"
    GREETING = "greeting"
    ABOUT = "about"
    OPENAI = "openai"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Intent:
    """Classified purpose of a message plus whatever the rule extracted."""

    kind: IntentKind
    channel_id: str = ""
    user_id: str = ""
    body: str = ""
    prompt: str = ""


@dataclass
class RouteOutcome:
    """What the router did with one event."""

    kind: str
    handled: bool = False
    error: Optional[str] = None
    detail: str = ""

    @property
    def failed(self) -> bool:
        return self.error is not None
