"""Slack adapters — Socket Mode transport, Web API messaging, Block Kit."""

from dadbot.adapters.slack.messaging import SlackMessagingAdapter
from dadbot.adapters.slack.transport import SocketModeTransport

__all__ = [
    "SlackMessagingAdapter",
    "SocketModeTransport",
]
