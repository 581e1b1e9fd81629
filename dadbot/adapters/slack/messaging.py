"""Slack Web API adapter — implements MessagingPort."""

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from dadbot.ports.outbound import ConversationResult, PostResult


def _api_error(e: SlackApiError) -> str:
    try:
        return str(e.response["error"])
    except Exception:
        return str(e)


class SlackMessagingAdapter:
    """Posts messages and opens conversations. Never raises."""

    def __init__(self, web_client: AsyncWebClient):
        self._client = web_client

    async def post_message(self, channel_id: str, text: str) -> PostResult:
        try:
            resp = await self._client.chat_postMessage(channel=channel_id, text=text)
        except SlackApiError as e:
            return PostResult(success=False, error=_api_error(e))
        except Exception as e:
            return PostResult(success=False, error=str(e) or type(e).__name__)
        return PostResult(success=True, ts=resp.get("ts"))

    async def open_conversation(self, user_id: str) -> ConversationResult:
        try:
            resp = await self._client.conversations_open(users=[user_id])
        except SlackApiError as e:
            return ConversationResult(success=False, error=_api_error(e))
        except Exception as e:
            return ConversationResult(success=False, error=str(e) or type(e).__name__)

        channel = resp.get("channel") or {}
        channel_id = channel.get("id", "")
        if not channel_id:
            return ConversationResult(success=False, error="conversations.open returned no channel")
        return ConversationResult(success=True, channel_id=channel_id)
