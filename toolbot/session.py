"""Platform session - every Discord call the bot makes goes through here.

The reconciler and the command handlers receive a session explicitly, so
tests can swap in an in-memory fake with the same coroutine methods.
"""

import discord

from toolbot.config import Settings
from toolbot.discord_api import register_commands


class ChannelMisconfigured(Exception):
    """The configured target channel cannot host private threads."""


class DiscordSession:
    def __init__(self, client: discord.Client, settings: Settings):
        self.client = client
        self.settings = settings

    async def fetch_text_channel(self, channel_id: int) -> discord.TextChannel:
        """Fetch a channel fresh from the API and check it is a text channel."""
        channel = await self.client.fetch_channel(channel_id)
        if not isinstance(channel, discord.TextChannel):
            raise ChannelMisconfigured(
                f"channel {channel_id} is {type(channel).__name__}, not a text channel"
            )
        return channel

    async def fetch_pins(self, channel: discord.TextChannel) -> list[discord.Message]:
        return list(await channel.pins())

    async def fetch_recent(self, channel: discord.TextChannel, limit: int) -> list[discord.Message]:
        return [message async for message in channel.history(limit=limit)]

    async def send(self, target, content: str | None = None, embed: discord.Embed | None = None) -> discord.Message:
        if embed is not None:
            return await target.send(content=content, embed=embed)
        return await target.send(content=content)

    async def pin(self, message: discord.Message) -> None:
        await message.pin()

    async def create_private_thread(
        self,
        channel: discord.TextChannel,
        name: str,
        archive_minutes: int,
        reason: str | None = None,
    ) -> discord.Thread:
        return await channel.create_thread(
            name=name,
            type=discord.ChannelType.private_thread,
            auto_archive_duration=archive_minutes,
            invitable=True,
            reason=reason,
        )

    async def add_thread_member(self, thread: discord.Thread, user_id: int) -> None:
        await thread.add_user(discord.Object(id=user_id))

    async def set_topic(self, channel: discord.TextChannel, topic: str) -> None:
        await channel.edit(topic=topic)

    async def defer(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True, thinking=True)

    async def acknowledge(self, interaction: discord.Interaction, content: str, deferred: bool) -> None:
        """Send the one final reply: edit the deferred response, or reply directly."""
        if deferred:
            await interaction.edit_original_response(content=content)
        else:
            await interaction.response.send_message(content, ephemeral=True)

    async def register_commands(self, definitions: list[dict]) -> list[dict]:
        return await register_commands(
            self.settings.token,
            self.settings.app_id,
            definitions,
            guild_id=self.settings.guild_id,
        )
