"""Tests for bulk command registration over the Discord REST API."""

import json
import pytest
import httpx
from unittest.mock import patch

from toolbot.discord_api import DiscordAPIError, commands_path, register_commands


def _mock_client(handler):
    """Patch httpx.AsyncClient so requests go to `handler` instead of the network."""
    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(handler)
    return patch("toolbot.discord_api.httpx.AsyncClient", lambda **kw: real_client(transport=transport, **kw))


class TestCommandsPath:
    """Tests for route selection."""

    def test_global_route(self):
        assert commands_path(1) == "/applications/1/commands"

    def test_guild_route(self):
        assert commands_path(1, 2) == "/applications/1/guilds/2/commands"


class TestRegisterCommands:
    """Tests for register_commands."""

    @pytest.mark.asyncio
    async def test_puts_definitions_verbatim(self):
        seen = {}
        definitions = [{"name": "debloat", "description": "d", "options": []}]

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[{"id": "1", **definitions[0]}])

        with _mock_client(handler):
            result = await register_commands("tok", 10, definitions, guild_id=20)

        assert seen["method"] == "PUT"
        assert seen["url"] == "https://discord.com/api/v10/applications/10/guilds/20/commands"
        assert seen["auth"] == "Bot tok"
        assert seen["body"] == definitions
        assert result[0]["id"] == "1"

    @pytest.mark.asyncio
    async def test_global_scope_without_guild(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            return httpx.Response(200, json=[])

        with _mock_client(handler):
            assert await register_commands("tok", 10, []) == []

        assert seen["path"] == "/api/v10/applications/10/commands"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(401, json={"message": "401: Unauthorized", "code": 0})

        with _mock_client(handler):
            with pytest.raises(DiscordAPIError) as exc:
                await register_commands("bad", 10, [])

        assert exc.value.status_code == 401
        assert "Unauthorized" in exc.value.detail
