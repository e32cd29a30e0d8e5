"""Slash command system for the tool catalog."""

from .command import SlashCommand, CommandContext, CommandResult, ThreadSession
from .registry import dispatch_command, get_all_commands

__all__ = [
    "SlashCommand",
    "CommandContext",
    "CommandResult",
    "ThreadSession",
    "dispatch_command",
    "get_all_commands",
]
