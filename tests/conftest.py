"""Pytest configuration and shared fixtures."""

import itertools
import os
import pytest

# Set dummy env vars before importing modules that require them
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("DISCORD_APP_ID", "1000")
os.environ.setdefault("CHANNEL_ID", "2000")

_ids = itertools.count(9000)


class FakeMessage:
    def __init__(self, content=None, embed=None, pinned=False):
        self.id = next(_ids)
        self.content = content
        self.embed = embed
        self.pinned = pinned


class FakeChannel:
    """Text channel with a newest-first history and a pins view."""

    def __init__(self, messages=None, channel_id=2000):
        self.id = channel_id
        self.messages = list(messages or [])
        self.topic = None

    @property
    def pins(self):
        return [m for m in self.messages if m.pinned]


class FakeThread:
    def __init__(self, name, parent):
        self.id = next(_ids)
        self.name = name
        self.parent = parent
        self.messages = []
        self.members = []

    @property
    def mention(self):
        return f"<#{self.id}>"


class FakeSession:
    """In-memory stand-in for DiscordSession.

    Every call is recorded in `calls`. Put a step name in `failures` to make
    that call raise; steps in `fail_once` raise only the first time;
    `fail_on_send` makes the Nth send (1-based) raise.
    """

    def __init__(self, channel=None, failures=None, fail_on_send=None, fail_once=None):
        self.channel = channel if channel is not None else FakeChannel()
        self.failures = dict(failures or {})
        self.fail_on_send = fail_on_send
        self.fail_once = set(fail_once or ())
        self.calls = []
        self.threads = []
        self.acks = []
        self.registered = None
        self._sends = 0

    def _record(self, step):
        self.calls.append(step)
        if step in self.failures:
            raise self.failures[step]
        if step in self.fail_once:
            self.fail_once.discard(step)
            raise RuntimeError(f"{step} failed")

    async def fetch_text_channel(self, channel_id):
        self._record("fetch_channel")
        return self.channel

    async def fetch_pins(self, channel):
        self._record("fetch_pins")
        return channel.pins

    async def fetch_recent(self, channel, limit):
        self._record("fetch_history")
        return channel.messages[:limit]

    async def send(self, target, content=None, embed=None):
        self._record("send")
        self._sends += 1
        if self.fail_on_send is not None and self._sends == self.fail_on_send:
            raise RuntimeError("send failed")
        message = FakeMessage(content=content, embed=embed)
        if isinstance(target, FakeChannel):
            target.messages.insert(0, message)  # history is newest-first
        else:
            target.messages.append(message)
        return message

    async def pin(self, message):
        self._record("pin")
        message.pinned = True

    async def create_private_thread(self, channel, name, archive_minutes, reason=None):
        self._record("create_thread")
        thread = FakeThread(name, channel)
        thread.archive_minutes = archive_minutes
        self.threads.append(thread)
        return thread

    async def add_thread_member(self, thread, user_id):
        self._record("add_member")
        thread.members.append(user_id)

    async def set_topic(self, channel, topic):
        self._record("set_topic")
        channel.topic = topic

    async def defer(self, interaction):
        self._record("defer")

    async def acknowledge(self, interaction, content, deferred):
        self._record("acknowledge")
        self.acks.append((content, deferred))

    async def register_commands(self, definitions):
        self._record("register_commands")
        self.registered = list(definitions)
        return self.registered


@pytest.fixture
def settings():
    from toolbot.config import Settings

    return Settings(token="test-token", app_id=1000, channel_id=2000)


@pytest.fixture
def catalog():
    from toolbot.catalog import parse_catalog

    return parse_catalog({
        "/debloat": [{"name": "CCleaner", "url": "https://x", "blurb": "cleans"}],
        "/monitor": [
            {"name": "HWiNFO", "url": "https://hwinfo.example", "blurb": "sensors"},
            {"name": "CrystalDiskInfo", "url": "https://cdi.example", "blurb": "disks"},
            {"name": "OCCT", "url": "https://occt.example", "blurb": "stress"},
        ],
    })


@pytest.fixture
def definitions():
    return [
        {"name": "debloat", "description": "Debloat tools"},
        {"name": "monitor", "description": "Monitoring tools"},
    ]


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory for tests."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir
