"""Discord REST client for bulk slash-command registration."""

import httpx


DISCORD_API_URL = "https://discord.com/api/v10"


class DiscordAPIError(Exception):
    """Non-2xx response from the Discord REST API."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"Discord API error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def commands_path(app_id: int, guild_id: int | None = None) -> str:
    """Route for the command set of an application (guild-scoped if guild_id)."""
    if guild_id:
        return f"/applications/{app_id}/guilds/{guild_id}/commands"
    return f"/applications/{app_id}/commands"


async def _request_async(method: str, path: str, token: str, payload=None):
    """Send an authenticated request to the Discord API (async)."""
    headers = {
        "Authorization": f"Bot {token}",
        "Content-Type": "application/json",
    }
    async with httpx.AsyncClient() as client:
        response = await client.request(
            method,
            f"{DISCORD_API_URL}{path}",
            json=payload,
            headers=headers,
            timeout=30,
        )
        if response.status_code >= 400:
            # Body is safe to surface; Discord never echoes the token
            raise DiscordAPIError(response.status_code, response.text[:300])
        if response.status_code == 204 or not response.content:
            return None
        return response.json()


async def register_commands(
    token: str,
    app_id: int,
    definitions: list[dict],
    guild_id: int | None = None,
) -> list[dict]:
    """Replace the application's command set with `definitions`.

    This is a bulk overwrite: commands missing from `definitions` are deleted
    by Discord. Guild-scoped sets apply at once; global ones can take a while
    to show up in clients.

    Returns:
        The command objects Discord now has registered.
    """
    result = await _request_async("PUT", commands_path(app_id, guild_id), token, definitions)
    return result or []
