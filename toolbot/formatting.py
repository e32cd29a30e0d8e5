"""Message templates, reference documents and tool embeds."""

from dataclasses import dataclass

import discord

from toolbot.catalog import ToolEntry


MESSAGE_LIMIT = 2000
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096
THREAD_NAME_LIMIT = 100

EMBED_COLOR = 0x5865F2

WARNING = (
    "⚠️ **Disclaimer**\n"
    "The links below point to third-party tools that are not affiliated with this server. "
    "Download only from the official sites listed, read what each tool changes before running it, "
    "and back up your system first. You use them at your own risk."
)

SUCCESS_MESSAGE = "🔒 Private thread created in <#{channel_id}> and you've been added: {thread}"
SUCCESS_MESSAGE_NO_INVITE = "🔒 Private thread created in <#{channel_id}>: {thread}"
FAILURE_MESSAGE = "❌ Something went wrong creating your thread."
MISCONFIGURED_MESSAGE = "❌ Bot misconfigured: target channel not text-based."

COMMAND_DECK_MARKER = "📇 **Tool Thread Command Deck**"
INSTRUCTIONS_MARKER = "📖 **How to use Tool Threads**"

INSTRUCTIONS = (
    f"{INSTRUCTIONS_MARKER}\n"
    "1. Type one of the slash commands from the pinned command deck in any channel.\n"
    "2. The bot opens a private thread under this channel and adds you to it.\n"
    "3. The thread lists the tools for that command, one message per tool.\n"
    "4. Threads archive themselves after a period of inactivity.\n\n"
    f"{WARNING}"
)


@dataclass(frozen=True)
class ReferenceDocument:
    marker: str
    body: str


def contains_marker(content: str | None, marker: str) -> bool:
    """True when a message body carries the given marker."""
    return bool(content) and marker in content


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def build_command_deck(definitions: list[dict]) -> str:
    """Render the pinned command list, kept under the message limit."""
    body = f"{COMMAND_DECK_MARKER}\nRun any of these to get a private thread of tools:"
    for i, definition in enumerate(definitions):
        description = (definition.get("description") or "").strip()
        line = f"`/{definition['name']}`" + (f": {description}" if description else "")
        more = f"\n…and {len(definitions) - i} more"
        # The footer only needs room if more lines follow this one
        reserve = len(more) if i < len(definitions) - 1 else 0
        if len(body) + 1 + len(line) + reserve > MESSAGE_LIMIT:
            return body + more
        body += f"\n{line}"
    return body


def reference_documents(definitions: list[dict]) -> list[ReferenceDocument]:
    return [
        ReferenceDocument(marker=COMMAND_DECK_MARKER, body=build_command_deck(definitions)),
        ReferenceDocument(marker=INSTRUCTIONS_MARKER, body=INSTRUCTIONS),
    ]


def make_embed(entry: ToolEntry) -> discord.Embed:
    return discord.Embed(
        title=_clip(entry.name, EMBED_TITLE_LIMIT),
        url=entry.url,
        description=_clip(entry.blurb, EMBED_DESCRIPTION_LIMIT),
        color=EMBED_COLOR,
    )


def thread_name(user_name: str, command_name: str) -> str:
    return _clip(f"{user_name}-{command_name}", THREAD_NAME_LIMIT)
