"""Socket Mode transport — bridges slack_sdk's client to the EventRouter.

Incoming requests are decoded once and pushed onto an asyncio.Queue; the
router drains `events()` from a single task, so handlers never overlap.
Implements AcknowledgePort.
"""

import asyncio
import sys
from typing import AsyncIterator, Optional

from slack_sdk.socket_mode.aiohttp import SocketModeClient
from slack_sdk.socket_mode.request import SocketModeRequest
from slack_sdk.socket_mode.response import SocketModeResponse

from dadbot.adapters.slack.blocks import build_block_payload
from dadbot.adapters.slack.decoder import decode_request
from dadbot.ports.inbound import (
    CONNECTED,
    CONNECTING,
    CONNECTION_ERROR,
    DISCONNECTED,
    Event,
    LifecycleEvent,
)
from dadbot.ports.outbound import SlashReply


def _log(msg: str):
    print(msg, file=sys.stderr)


_STOP = object()


class SocketModeTransport:
    """Owns the Socket Mode client and the event queue."""

    def __init__(self, client: SocketModeClient):
        self._client = client
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        client.socket_mode_request_listeners.append(self._on_request)
        client.on_error_listeners.append(self._on_error)
        client.on_close_listeners.append(self._on_close)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def connect(self) -> None:
        self._queue.put_nowait(LifecycleEvent(CONNECTING))
        try:
            await self._client.connect()
        except Exception as e:
            self._queue.put_nowait(LifecycleEvent(CONNECTION_ERROR, detail=str(e)))
            raise
        self._queue.put_nowait(LifecycleEvent(CONNECTED))

    async def close(self) -> None:
        """Stop the event stream and disconnect. Queued events are dropped."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_STOP)
        await self._client.close()

    async def events(self) -> AsyncIterator[Event]:
        while True:
            item = await self._queue.get()
            if item is _STOP:
                return
            yield item

    async def acknowledge(self, envelope_id: str, reply: Optional[SlashReply] = None) -> None:
        payload = build_block_payload(reply) if reply is not None else None
        try:
            await self._client.send_socket_mode_response(
                SocketModeResponse(envelope_id=envelope_id, payload=payload)
            )
        except Exception as e:
            _log(f"[socket] failed acknowledging {envelope_id!r}: {e}")

    # -- slack_sdk listeners --

    async def _on_request(self, client: SocketModeClient, req: SocketModeRequest) -> None:
        if self._closed:
            return
        self._queue.put_nowait(decode_request(req.type, req.envelope_id, req.payload))

    async def _on_error(self, message) -> None:
        detail = str(getattr(message, "data", message))
        self._queue.put_nowait(LifecycleEvent(CONNECTION_ERROR, detail=detail))

    async def _on_close(self, message) -> None:
        if not self._closed:
            self._queue.put_nowait(LifecycleEvent(DISCONNECTED))
