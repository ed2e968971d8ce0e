"""
Test suite for the executor registry.
Checks alias keys, last-write-wins overwrites and warn-and-continue validation.
"""
import logging

import pytest

from conftest import RecordingMessage, RecordingSlash
from easycommands import ExecutorRegistry


def warnings_in(caplog):
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]


def test_name_and_aliases_are_all_keys():
    """An executor with k aliases yields k+1 entries, all pointing to it."""
    executor = RecordingMessage(name="ping", description="Ping", aliases=["p", "pong"])
    registry = ExecutorRegistry().add(executor)

    entries = registry.all()
    assert set(entries) == {"ping", "p", "pong"}
    assert len(entries) == 3
    assert all(value is executor for value in entries.values())


def test_same_name_last_write_wins(caplog):
    """The second executor registered under a key replaces the first, with a warning."""
    first = RecordingSlash(name="help", description="First")
    second = RecordingSlash(name="help", description="Second")
    registry = ExecutorRegistry()

    registry.add(first)
    registry.add(second)

    assert len(registry.all()) == 1
    assert registry.get("help") is second
    assert any("overwritten" in message for message in warnings_in(caplog))


def test_empty_name_warns_but_registers(caplog):
    """An empty name is warned about and still inserted under the empty key."""
    executor = RecordingMessage(name="", description="Nameless")
    registry = ExecutorRegistry().add(executor)

    assert registry.get("") is executor
    assert any("doesn't have a name" in message for message in warnings_in(caplog))


def test_missing_name_registers_under_empty_key(caplog):
    executor = RecordingMessage(name=None, description="Nameless")
    executor.name = None
    registry = ExecutorRegistry().add(executor)

    assert registry.get("") is executor
    assert warnings_in(caplog)


def test_missing_description_warns(caplog):
    executor = RecordingSlash(name="nodesc")
    registry = ExecutorRegistry().add(executor)

    assert "nodesc" in registry
    assert any("doesn't have a description" in message for message in warnings_in(caplog))


def test_empty_alias_warns(caplog):
    executor = RecordingMessage(name="roll", description="Roll a die", aliases=["r", ""])
    registry = ExecutorRegistry().add(executor)

    assert set(registry.all()) == {"roll", "r", ""}
    assert any("Alias" in message for message in warnings_in(caplog))


def test_valid_executor_emits_no_warning(caplog):
    ExecutorRegistry().add(RecordingMessage(name="ok", description="Fine", aliases=["o"]))
    assert warnings_in(caplog) == []


def test_clear_empties_and_chains():
    registry = ExecutorRegistry().add(RecordingSlash(name="a", description="A"))
    assert registry.clear() is registry
    assert dict(registry.all()) == {}
    assert len(registry) == 0


def test_all_is_read_only():
    registry = ExecutorRegistry().add(RecordingSlash(name="a", description="A"))
    with pytest.raises(TypeError):
        registry.all()["b"] = RecordingSlash(name="b", description="B")


def test_unique_deduplicates_aliases_in_registration_order():
    ping = RecordingMessage(name="ping", description="Ping", aliases=["p", "pong"])
    help_cmd = RecordingSlash(name="help", description="Help", aliases=["h"])
    registry = ExecutorRegistry().add(ping, help_cmd)

    assert registry.unique() == [ping, help_cmd]


def test_unique_drops_fully_overwritten_executor():
    first = RecordingSlash(name="help", description="First")
    second = RecordingSlash(name="help", description="Second")
    registry = ExecutorRegistry().add(first, second)

    assert registry.unique() == [second]
