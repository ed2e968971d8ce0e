"""
Shared fixtures and fakes for the EasyCommands test suite.
"""
import asyncio
import os
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Keep test runs from writing log files
os.environ.setdefault("EASYCOMMANDS_FILE_LOGGING", "false")

ROOT_DIR = Path(__file__).resolve().parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import discord
import pytest

from easycommands import MessageExecutor, SlashExecutor


# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ EXECUTOR FAKES                                                             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class RecordingSlash(SlashExecutor):
    """Slash executor that records hook calls and invocations."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []
        self.contexts = []

    def update_options(self):
        self.calls.append(("options",))
        super().update_options()

    def update_aliases(self, connection):
        self.calls.append(("aliases", connection))
        super().update_aliases(connection)

    def update_authorized_channels(self, connection):
        self.calls.append(("channels", connection))
        super().update_authorized_channels(connection)

    def update_authorized_roles(self, connection):
        self.calls.append(("roles", connection))
        super().update_authorized_roles(connection)

    async def execute(self, context):
        self.contexts.append(context)


class RecordingMessage(MessageExecutor):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []
        self.contexts = []

    def update_aliases(self, connection):
        self.calls.append(("aliases", connection))
        super().update_aliases(connection)

    def update_authorized_channels(self, connection):
        self.calls.append(("channels", connection))
        super().update_authorized_channels(connection)

    def update_authorized_roles(self, connection):
        self.calls.append(("roles", connection))
        super().update_authorized_roles(connection)

    async def execute(self, context):
        self.contexts.append(context)


# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CONNECTION FAKES                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class FakeConnection:
    """Stands in for EasyClient in synchronizer tests."""

    def __init__(self):
        self.bulk_updates = []

    def bulk_update_commands(self, declarations):
        self.bulk_updates.append(list(declarations))


class FakeClient(FakeConnection):
    """Stands in for EasyClient in facade lifecycle tests."""

    def __init__(self, connect_error=None, login_error=None, remote_commands=None):
        super().__init__()
        self.connect_error = connect_error
        self.login_error = login_error
        self.remote_commands = remote_commands or []
        self.listeners = []
        self.logged_in_with = None
        self.closed = False
        self._closed_event = None

    def add_listener(self, listener):
        listener.client = self
        self.listeners.append(listener)

    @property
    def registered_listeners(self):
        return list(self.listeners)

    async def login(self, token):
        if self.login_error is not None:
            raise self.login_error
        self.logged_in_with = token

    async def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        if self.closed:
            return
        self._closed_event = asyncio.Event()
        await self._closed_event.wait()

    async def wait_until_ready(self):
        if self.connect_error is not None:
            # Never becomes ready
            await asyncio.Event().wait()

    async def retrieve_commands(self):
        return self.remote_commands

    async def wait_for_submissions(self, timeout=None):
        return None

    def is_closed(self):
        return self.closed

    async def close(self):
        self.closed = True
        if self._closed_event is not None:
            self._closed_event.set()


# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ DISCORD OBJECT FAKES                                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def make_member(role_ids=(), bot=False):
    member = MagicMock()
    member.bot = bot
    member.roles = [SimpleNamespace(id=role_id) for role_id in role_ids]
    member.__str__.return_value = "tester#0001"
    return member


def make_message(content, channel_id=100, role_ids=(), bot=False):
    message = MagicMock()
    message.content = content
    message.author = make_member(role_ids, bot)
    message.channel.id = channel_id
    message.reply = AsyncMock()
    return message


def make_interaction(name, options=None, channel_id=100, role_ids=(), command_type=1,
                     interaction_type=discord.InteractionType.application_command):
    interaction = MagicMock()
    interaction.type = interaction_type
    interaction.data = {"type": command_type, "name": name, "options": options or []}
    interaction.user = make_member(role_ids)
    interaction.channel_id = channel_id
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.response.send_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


@pytest.fixture
def connection():
    return FakeConnection()
