"""
Test suite for the EasyCommands facade: configuration accumulation,
client construction and the connect -> sync -> log lifecycle.
"""
import asyncio
from types import SimpleNamespace

import discord
import pytest

from conftest import FakeClient, RecordingMessage, RecordingSlash
from easycommands import (
    DEFAULT_INTENTS,
    ConfigurationError,
    ConnectionFailedError,
    EasyClient,
    EasyCommands,
    FacadeState,
    Listener,
    MessageCommandListener,
    SlashCommandListener,
)


def facade_with(client, monkeypatch, **kwargs):
    easy = EasyCommands("token", **kwargs)
    monkeypatch.setattr(easy, "create_client", lambda: client)
    return easy

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CONFIGURATION                                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def test_token_is_required():
    with pytest.raises(ConfigurationError):
        EasyCommands("")


def test_defaults_and_state():
    easy = EasyCommands("token")
    assert easy.state == FacadeState.UNCONFIGURED
    assert easy.gateway_intents == DEFAULT_INTENTS
    assert isinstance(easy.listeners[0], SlashCommandListener)
    assert isinstance(easy.listeners[1], MessageCommandListener)


def test_accumulation_chains_and_moves_to_configuring():
    easy = EasyCommands("token", load_default_intents=False)
    ping = RecordingMessage(name="ping", description="Ping", aliases=["p"])

    result = (
        easy.add_gateway_intents("presences")
        .add_enabled_cache_flags("voice")
        .add_disabled_cache_flags("joined")
        .register_listeners(Listener())
        .add_executor(ping)
    )

    assert result is easy
    assert easy.state == FacadeState.CONFIGURING
    assert easy.gateway_intents == ["presences"]
    assert easy.enabled_cache_flags == ["voice"]
    assert easy.disabled_cache_flags == ["joined"]
    assert set(easy.executors) == {"ping", "p"}
    assert easy.clear_executors() is easy
    assert dict(easy.executors) == {}


def test_unknown_intent_and_cache_flag_are_rejected():
    easy = EasyCommands("token")
    with pytest.raises(ConfigurationError):
        easy.add_gateway_intents("not_an_intent")
    with pytest.raises(ConfigurationError):
        easy.add_enabled_cache_flags("member_overrides")


def test_build_intents_only_enables_configured_flags():
    easy = EasyCommands("token", load_default_intents=False).add_gateway_intents("guilds", "members")
    intents = easy.build_intents()

    assert intents.guilds and intents.members
    assert not intents.message_content
    assert not intents.presences


def test_disabled_cache_flag_wins_over_enabled():
    easy = EasyCommands("token").add_enabled_cache_flags("voice").add_disabled_cache_flags("voice")
    flags = easy.build_member_cache_flags(easy.build_intents())
    assert not flags.voice


def test_create_client_registers_listeners():
    extra = Listener()
    easy = EasyCommands("token").register_listeners(extra)

    client = easy.create_client()

    assert isinstance(client, EasyClient)
    assert client.registered_listeners == easy.listeners
    assert extra.client is client
    assert client.intents.members


def test_cache_flag_without_intent_is_configuration_error():
    easy = EasyCommands("token", load_default_intents=False).add_gateway_intents("guilds")
    easy.add_enabled_cache_flags("voice")
    with pytest.raises(ConfigurationError):
        easy.create_client()

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LIFECYCLE                                                                  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@pytest.mark.asyncio
async def test_start_connects_syncs_and_logs(monkeypatch, caplog):
    client = FakeClient(remote_commands=[SimpleNamespace(name="help", id=1234)])
    easy = facade_with(client, monkeypatch)
    easy.add_executor(
        RecordingSlash(name="help", description="Shows help", aliases=["h"]),
        RecordingMessage(name="ping", description="Ping"),
    )

    result = await easy.start()

    assert result is client
    assert client.logged_in_with == "token"
    assert easy.state == FacadeState.SYNCED
    assert len(client.bulk_updates) == 1
    assert [d.name for d in client.bulk_updates[0]] == ["help"]
    assert easy.last_declarations == client.bulk_updates[0]
    messages = [record.getMessage() for record in caplog.records]
    assert "/help:1234" in messages
    assert any(message.startswith("[OK] EasyCommands finished loading") for message in messages)

    await easy.close()
    assert client.closed


@pytest.mark.asyncio
async def test_second_start_closes_previous_client_and_resyncs(monkeypatch):
    first, second = FakeClient(), FakeClient()
    clients = iter([first, second])
    easy = EasyCommands("token")
    monkeypatch.setattr(easy, "create_client", lambda: next(clients))
    easy.add_executor(RecordingSlash(name="help", description="Help"))

    assert await easy.start() is first
    assert await easy.start() is second

    assert first.closed
    assert not second.closed
    assert len(first.bulk_updates) == 1
    assert len(second.bulk_updates) == 1
    assert [d.name for d in second.bulk_updates[0]] == ["help"]
    assert easy.client is second
    assert easy.state == FacadeState.SYNCED

    await easy.close()
    assert second.closed


@pytest.mark.asyncio
async def test_gateway_failure_before_ready_propagates(monkeypatch):
    client = FakeClient(connect_error=discord.GatewayNotFound())
    easy = facade_with(client, monkeypatch)

    with pytest.raises(discord.GatewayNotFound):
        await easy.start()

    assert client.closed
    assert client.bulk_updates == []


@pytest.mark.asyncio
async def test_gateway_closing_cleanly_before_ready_is_connection_failure(monkeypatch):
    class ClosesImmediately(FakeClient):
        async def connect(self):
            return None

        async def wait_until_ready(self):
            await super().wait_until_ready()
            await asyncio.Event().wait()

    easy = facade_with(ClosesImmediately(), monkeypatch)
    with pytest.raises(ConnectionFailedError):
        await easy.start()


@pytest.mark.asyncio
async def test_login_failure_propagates_and_closes(monkeypatch):
    client = FakeClient(login_error=discord.LoginFailure("bad token"))
    easy = facade_with(client, monkeypatch)

    with pytest.raises(discord.LoginFailure):
        await easy.start()

    assert client.closed
    assert easy.state == FacadeState.CONNECTING


@pytest.mark.asyncio
async def test_read_back_failure_does_not_fail_start(monkeypatch):
    class BrokenReadBack(FakeClient):
        async def retrieve_commands(self):
            raise RuntimeError("HTTP 500")

    client = BrokenReadBack()
    easy = facade_with(client, monkeypatch)
    easy.add_executor(RecordingSlash(name="help", description="Help"))

    assert await easy.start() is client
    assert easy.state == FacadeState.SYNCED
    await easy.close()


def test_build_blocks_until_synced(monkeypatch):
    client = FakeClient()
    easy = facade_with(client, monkeypatch)
    easy.add_executor(RecordingSlash(name="help", description="Help"))

    try:
        assert easy.build() is client
        assert easy.state == FacadeState.SYNCED
        assert len(client.bulk_updates) == 1
    finally:
        easy.shutdown()
    assert client.closed


def test_build_raises_connection_errors(monkeypatch):
    easy = facade_with(FakeClient(login_error=discord.LoginFailure("bad token")), monkeypatch)
    try:
        with pytest.raises(discord.LoginFailure):
            easy.build()
    finally:
        easy.shutdown()
