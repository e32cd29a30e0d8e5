"""Discord client: routes gateway events to the reconciler and the dispatcher."""

import traceback

import discord

from toolbot.catalog import CommandCatalog
from toolbot.commands import dispatch_command
from toolbot.config import Settings
from toolbot.reconciler import run_startup
from toolbot.session import DiscordSession


def _handle_loop_exception(loop, context: dict) -> None:
    """Log exceptions from stray asyncio tasks instead of letting them vanish."""
    error = context.get("exception")
    print(f"❌ Unhandled async error: {context.get('message', 'unknown')}", flush=True)
    if error is not None:
        traceback.print_exception(type(error), error, error.__traceback__)


class ToolBot(discord.Client):
    def __init__(self, settings: Settings, catalog: CommandCatalog, definitions: list[dict]):
        super().__init__(intents=discord.Intents.default())
        self.settings = settings
        self.catalog = catalog
        self.definitions = definitions
        self.session = DiscordSession(self, settings)
        self._startup_done = False

    async def setup_hook(self) -> None:
        self.loop.set_exception_handler(_handle_loop_exception)

    async def on_ready(self) -> None:
        # on_ready fires again after reconnects; reconcile once per process
        if self._startup_done:
            print("🔁 Reconnected; startup already done", flush=True)
            return
        self._startup_done = True
        print(f"🤖 Logged in as {self.user}", flush=True)
        await run_startup(self.session, self.settings, self.definitions)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type != discord.InteractionType.application_command:
            return
        command_name = (interaction.data or {}).get("name", "")
        await dispatch_command(
            self.catalog,
            command_name,
            user_id=interaction.user.id,
            user_name=interaction.user.name,
            interaction=interaction,
            session=self.session,
            settings=self.settings,
        )

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        print(f"❌ Unhandled error in {event_method}", flush=True)
        traceback.print_exc()
