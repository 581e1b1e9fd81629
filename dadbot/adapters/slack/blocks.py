"""Block Kit rendering for slash command replies."""

from typing import Any, Dict

from slack_sdk.models.blocks import (
    ButtonElement,
    MarkdownTextObject,
    PlainTextObject,
    SectionBlock,
)

from dadbot.ports.outbound import SlashReply

# Slack rejects section text longer than this
SECTION_TEXT_LIMIT = 3000
BUTTON_VALUE = "somevalue"


def truncate_text(text: str, limit: int = SECTION_TEXT_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def build_block_payload(reply: SlashReply) -> Dict[str, Any]:
    """Section with the reply text and a decorative button accessory."""
    section = SectionBlock(
        text=MarkdownTextObject(text=truncate_text(reply.text or " ")),
        accessory=ButtonElement(
            text=PlainTextObject(text=reply.button_label),
            value=BUTTON_VALUE,
        ),
    )
    return {"blocks": [section.to_dict()]}
