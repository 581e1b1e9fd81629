"""Domain layer — pure Python, no framework dependencies."""

from dadbot.domain.models import Intent, IntentKind, RouteOutcome
from dadbot.domain.classifier import classify
from dadbot.domain.dedup import DedupStore
from dadbot.domain.handlers import ActionHandlers
from dadbot.domain.router import EventRouter

__all__ = [
    "Intent",
    "IntentKind",
    "RouteOutcome",
    "classify",
    "DedupStore",
    "ActionHandlers",
    "EventRouter",
]
