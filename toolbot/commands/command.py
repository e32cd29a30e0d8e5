"""Base slash command interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from toolbot.config import Settings


@dataclass
class CommandContext:
    """Context passed to slash command handlers."""
    command_name: str  # Without the slash, as Discord reports it
    user_id: int
    user_name: str
    interaction: Any  # discord.Interaction; opaque to handlers, used via the session
    session: Any  # DiscordSession or a test double
    settings: "Settings"


@dataclass
class ThreadSession:
    """The private thread provisioned for one invocation. Never persisted."""
    channel_id: int
    thread_id: int
    inviter_user_id: int
    created_at: datetime


@dataclass
class CommandResult:
    """Result returned from a slash command."""
    status: str  # "completed", "degraded", "error"
    action: str  # The command name
    message: str = ""
    thread: ThreadSession | None = None


class SlashCommand(ABC):
    """Base class for slash commands.

    Subclasses set `name` (with the leading slash) and implement `execute()`.
    Descriptions live in commands.json, which is what Discord and the pinned
    command deck show.
    """

    name: str = ""

    @abstractmethod
    async def execute(self, ctx: CommandContext) -> CommandResult:
        """Execute the command.

        Args:
            ctx: Command context with the invoker, interaction and session

        Returns:
            CommandResult indicating outcome
        """
        pass
