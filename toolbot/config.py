"""Environment-driven settings for the bot."""

import os
from dataclasses import dataclass


REQUIRED_KEYS = ("DISCORD_TOKEN", "DISCORD_APP_ID", "CHANNEL_ID")

# Discord only accepts these auto-archive durations (minutes)
ARCHIVE_DURATIONS = (60, 1440, 4320, 10080)

DEFAULT_TOPIC = "Run a slash command to open a private tool thread. Usage notes are pinned."


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    token: str
    app_id: int
    channel_id: int
    guild_id: int | None = None
    set_channel_topic: bool = False
    channel_topic: str = DEFAULT_TOPIC
    register_on_startup: bool = True
    auto_invite_invoker: bool = True
    defer_reply: bool = True
    thread_archive_minutes: int = 60
    history_scan_limit: int = 50
    tools_path: str = "./data/tools.json"
    commands_path: str = "./data/commands.json"

    @property
    def scope(self) -> str:
        """Human-readable registration scope."""
        return f"guild {self.guild_id}" if self.guild_id else "global"


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse_id(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be a numeric Discord id, got {raw!r}")


def _parse_int(key: str, raw: str | None, default: int, allowed=None, lo=None, hi=None) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        print(f"⚠️ {key}={raw!r} is not a number, using {default}", flush=True)
        return default
    if allowed is not None and value not in allowed:
        print(f"⚠️ {key}={value} not one of {allowed}, using {default}", flush=True)
        return default
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        print(f"⚠️ {key}={value} outside {lo}-{hi}, using {default}", flush=True)
        return default
    return value


def load_settings(env=None) -> Settings:
    """Build Settings from the environment.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigError: if any required key is missing or an id is not numeric
    """
    env = os.environ if env is None else env

    missing = [key for key in REQUIRED_KEYS if not (env.get(key) or "").strip()]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    guild_raw = (env.get("GUILD_ID") or "").strip()

    return Settings(
        token=env["DISCORD_TOKEN"].strip(),
        app_id=_parse_id("DISCORD_APP_ID", env["DISCORD_APP_ID"]),
        channel_id=_parse_id("CHANNEL_ID", env["CHANNEL_ID"]),
        guild_id=_parse_id("GUILD_ID", guild_raw) if guild_raw else None,
        set_channel_topic=parse_bool(env.get("SET_CHANNEL_TOPIC")),
        channel_topic=(env.get("CHANNEL_TOPIC") or "").strip() or DEFAULT_TOPIC,
        register_on_startup=parse_bool(env.get("REGISTER_ON_STARTUP"), default=True),
        auto_invite_invoker=parse_bool(env.get("AUTO_INVITE_INVOKER"), default=True),
        defer_reply=parse_bool(env.get("DEFER_REPLY"), default=True),
        thread_archive_minutes=_parse_int(
            "THREAD_ARCHIVE_MINUTES", env.get("THREAD_ARCHIVE_MINUTES"), 60, allowed=ARCHIVE_DURATIONS
        ),
        history_scan_limit=_parse_int(
            "HISTORY_SCAN_LIMIT", env.get("HISTORY_SCAN_LIMIT"), 50, lo=1, hi=100
        ),
        tools_path=env.get("TOOLS_PATH") or "./data/tools.json",
        commands_path=env.get("COMMANDS_PATH") or "./data/commands.json",
    )
