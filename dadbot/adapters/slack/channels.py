"""Public channel listing — helps find the ids used in channel mentions."""

import asyncio
import os
import sys
from dataclasses import dataclass
from typing import List

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient


@dataclass
class ChannelInfo:
    name: str
    channel_id: str


async def list_public_channels(web_client: AsyncWebClient, limit: int = 200) -> List[ChannelInfo]:
    """Return every public channel, following pagination cursors."""
    channels: List[ChannelInfo] = []
    cursor = None
    while True:
        kwargs = {"types": "public_channel", "limit": limit}
        if cursor:
            kwargs["cursor"] = cursor
        resp = await web_client.conversations_list(**kwargs)
        for ch in resp.get("channels") or []:
            channels.append(ChannelInfo(name=ch.get("name", ""), channel_id=ch.get("id", "")))
        cursor = (resp.get("response_metadata") or {}).get("next_cursor")
        if not cursor:
            return channels


async def _print_channels(token: str) -> int:
    try:
        channels = await list_public_channels(AsyncWebClient(token=token))
    except SlackApiError as e:
        print(f"Error listing channels: {e.response.get('error', e)}", file=sys.stderr)
        return 1
    for ch in channels:
        print(f"Channel Name: {ch.name}, Channel ID: {ch.channel_id}")
    return 0


def main() -> None:
    token = os.getenv("SLACK_BOT_TOKEN", "")
    if not token:
        print("SLACK_BOT_TOKEN=None", file=sys.stderr)
        sys.exit(1)
    sys.exit(asyncio.run(_print_channels(token)))


if __name__ == "__main__":
    main()
