"""Intent classification by prefix and exact phrase matching.

Pure Python, no framework dependencies. Rules are evaluated in table order
and the first match wins; anything unmatched goes to the completion fallback.
"""

import re
from typing import Callable, Dict, Tuple

from dadbot.domain.models import Intent, IntentKind

# <#C123|general> and <@U999> / <@U999|name>
CHANNEL_MENTION_RE = re.compile(r"<#([^|>\s]*)")
USER_MENTION_RE = re.compile(r"<@([^|>\s]*)")


def extract_channel_id(rest: str) -> str:
    """Channel id from the text following a prefix, empty if none."""
    match = CHANNEL_MENTION_RE.search(rest)
    if match:
        return match.group(1)
    return rest.split("|", 1)[0].strip().strip("<#>")


def extract_user_id(token: str) -> str:
    """User id from a mention token, empty if none."""
    match = USER_MENTION_RE.search(token)
    if match:
        return match.group(1)
    return token.split("|", 1)[0].strip().strip("<@>")


def _joke_to_channel(text: str, rest: str) -> Intent:
    return Intent(IntentKind.JOKE_TO_CHANNEL, channel_id=extract_channel_id(rest))


def _dm_relay(text: str, rest: str) -> Intent:
    return Intent(IntentKind.DM_RELAY, user_id=extract_user_id(rest))


def _joke_to_user(text: str, rest: str) -> Intent:
    return Intent(IntentKind.JOKE_TO_USER, user_id=extract_user_id(rest))


def _custom_dm(text: str, rest: str) -> Intent:
    parts = rest.split(" ", 1)
    token = parts[0] if parts else ""
    body = parts[1] if len(parts) > 1 else ""
    return Intent(IntentKind.CUSTOM_DM, user_id=extract_user_id(token), body=body)


# (lowercase prefix, intent constructor) — order is precedence
PREFIX_RULES: Tuple[Tuple[str, Callable[[str, str], Intent]], ...] = (
    ("tell a dad joke in channel ", _joke_to_channel),
    ("send a direct message to the slack user ", _dm_relay),
    ("tell a dad joke in a direct message to the slack user ", _joke_to_user),
    ("direct message slack user ", _custom_dm),
)

EXACT_PHRASES: Dict[str, IntentKind] = {
    "dadjoke": IntentKind.JOKE,
    "tell me a dadjoke": IntentKind.JOKE,
    "tell me another dadjoke": IntentKind.JOKE,
    "what is the weather like": IntentKind.WEATHER,
    "what is the weather like?": IntentKind.WEATHER,
    "time": IntentKind.TIME,
    "what time is it": IntentKind.TIME,
    "what time is it?": IntentKind.TIME,
    "do you know what time it is": IntentKind.TIME,
    "tell me the time": IntentKind.TIME,
    "what version are you?": IntentKind.VERSION,
    "what version are you": IntentKind.VERSION,
    "hello": IntentKind.GREETING,
    "hi": IntentKind.GREETING,
    "hey": IntentKind.GREETING,
    "who are you": IntentKind.ABOUT,
    "who are you?": IntentKind.ABOUT,
    "what are you?": IntentKind.ABOUT,
}

OPENAI_KEYWORD = "openai"


def classify(text: str) -> Intent:
    """Map raw message text to exactly one Intent."""
    text = text or ""
    lowered = text.lower()

    for prefix, build in PREFIX_RULES:
        if lowered.startswith(prefix):
            return build(text, text[len(prefix):])

    phrase = lowered.strip()
    kind = EXACT_PHRASES.get(phrase)
    if kind is not None:
        return Intent(kind)

    if phrase == OPENAI_KEYWORD:
        return Intent(IntentKind.OPENAI, prompt=text)

    return Intent(IntentKind.FALLBACK, prompt=text)
