import asyncio
import sys

from dotenv import load_dotenv

load_dotenv(override=True)

from toolbot.catalog import CatalogError, load_catalog, load_command_definitions, validate_catalog
from toolbot.config import ConfigError, load_settings
from toolbot.discord_api import register_commands


def _load_static(settings):
    """Load tools.json and commands.json, exiting on malformed data."""
    try:
        catalog = load_catalog(settings.tools_path)
        definitions = load_command_definitions(settings.commands_path)
    except CatalogError as e:
        print(f"❌ {e}", flush=True)
        sys.exit(1)
    return catalog, definitions


def _load_settings():
    try:
        return load_settings()
    except ConfigError as e:
        print(f"❌ {e}", flush=True)
        sys.exit(1)


def cmd_run(args):
    """Start the bot."""
    from toolbot.bot import ToolBot

    settings = _load_settings()
    catalog, definitions = _load_static(settings)

    for problem in validate_catalog(catalog, definitions):
        print(f"⚠️ {problem}", flush=True)

    print(f"🚀 Starting bot: {len(catalog)} commands, target channel {settings.channel_id}", flush=True)
    print(f"   Registration: {settings.scope if settings.register_on_startup else 'disabled'}", flush=True)
    print(f"   Invite invoker: {settings.auto_invite_invoker}, defer replies: {settings.defer_reply}", flush=True)

    ToolBot(settings, catalog, definitions).run(settings.token)


def cmd_register(args):
    """Push commands.json to Discord once and exit."""
    settings = _load_settings()
    _, definitions = _load_static(settings)

    print(f"📤 Registering {len(definitions)} commands ({settings.scope})...", flush=True)
    try:
        registered = asyncio.run(
            register_commands(settings.token, settings.app_id, definitions, guild_id=settings.guild_id)
        )
    except Exception as e:
        print(f"❌ Registration failed: {e}", flush=True)
        sys.exit(1)
    print(f"✅ Registered {len(registered)} {'guild' if settings.guild_id else 'global'} commands.", flush=True)


def cmd_check(args):
    """Validate the static data files without connecting."""
    try:
        catalog = load_catalog(args.tools)
        definitions = load_command_definitions(args.commands)
    except CatalogError as e:
        print(f"❌ {e}", flush=True)
        sys.exit(1)

    problems = validate_catalog(catalog, definitions)
    for problem in problems:
        print(f"✗ {problem}", flush=True)
    for command, entries in catalog.items():
        print(f"✓ {command}: {len(entries)} tools", flush=True)
    if problems:
        sys.exit(1)


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Discord bot that opens private threads of curated tool links")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Run the bot (config from environment / .env)")
    subparsers.add_parser("register", help="Register commands.json with Discord and exit")

    check_parser = subparsers.add_parser("check", help="Validate tools.json against commands.json")
    check_parser.add_argument("--tools", default="./data/tools.json", help="Tool catalog (default: ./data/tools.json)")
    check_parser.add_argument("--commands", default="./data/commands.json", help="Command definitions (default: ./data/commands.json)")

    args = parser.parse_args()

    if args.command == "run":
        cmd_run(args)
    elif args.command == "register":
        cmd_register(args)
    elif args.command == "check":
        cmd_check(args)


if __name__ == "__main__":
    main()
