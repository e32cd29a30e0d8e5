"""Command registry - builds handlers from the catalog and dispatches interactions."""

from toolbot.catalog import CommandCatalog
from toolbot.commands.command import SlashCommand, CommandContext, CommandResult
from toolbot.commands.handlers import ToolThreadCommand
from toolbot.config import Settings


def get_all_commands(catalog: CommandCatalog) -> list[SlashCommand]:
    """Get one handler per catalog command, in catalog order."""
    return [ToolThreadCommand(name, entries) for name, entries in catalog.items()]


def _get_command_map(catalog: CommandCatalog) -> dict[str, SlashCommand]:
    """Build a map of command name -> handler."""
    return {cmd.name: cmd for cmd in get_all_commands(catalog)}


async def dispatch_command(
    catalog: CommandCatalog,
    command_name: str,
    user_id: int,
    user_name: str,
    interaction,
    session,
    settings: Settings,
) -> CommandResult | None:
    """Route one slash-command invocation to its handler.

    Args:
        catalog: Command -> tools mapping
        command_name: Name Discord reports for the command (no slash)
        user_id: ID of the invoking user
        user_name: Username of the invoking user
        interaction: The interaction to defer and reply to
        session: Platform session used for every Discord call
        settings: Bot settings

    Returns:
        CommandResult if the command is ours, None otherwise. Commands we
        don't own are ignored without touching the platform.
    """
    if not command_name:
        return None

    handler = _get_command_map(catalog).get(f"/{command_name}")
    if not handler:
        return None

    ctx = CommandContext(
        command_name=command_name,
        user_id=user_id,
        user_name=user_name,
        interaction=interaction,
        session=session,
        settings=settings,
    )

    return await handler.execute(ctx)

