# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                         EASYCOMMANDS DISCORD CLIENT                        ║
# ║  discord.Client with pluggable listeners and bulk command submission       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import asyncio
from typing import List, Optional, Sequence, Set

import discord
from discord import app_commands

from easycommands.options import CommandDeclaration
from easycommands.utils.logging import logger

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LISTENER BASE                                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class Listener:
    """
    Receives gateway events through `on_<event>` coroutine methods, with the
    same names and arguments as discord.py's event reference::

        class Greeter(Listener):
            async def on_member_join(self, member):
                ...
    """

    client: Optional[discord.Client] = None

    def __repr__(self) -> str:
        return type(self).__name__

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CLIENT                                                                     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class EasyClient(discord.Client):
    def __init__(self, *, intents: discord.Intents, **options):
        super().__init__(intents=intents, **options)
        self._easy_listeners: List[Listener] = []
        self._pending_submissions: Set[asyncio.Task] = set()

    # --- add_listener ---
    # Registers a Listener and binds it to this client; its `on_<event>`
    # coroutines run for every matching gateway event.
    def add_listener(self, listener: Listener) -> None:
        listener.client = self
        self._easy_listeners.append(listener)

    @property
    def registered_listeners(self) -> List[Listener]:
        return list(self._easy_listeners)

    # --- dispatch ---
    # Same extension point discord.ext.commands.Bot uses for its extra
    # listeners: the client's own handlers run first, then each Listener's.
    def dispatch(self, event: str, /, *args, **kwargs) -> None:
        super().dispatch(event, *args, **kwargs)
        method = "on_" + event
        for listener in self._easy_listeners:
            coro = getattr(listener, method, None)
            if coro is not None and asyncio.iscoroutinefunction(coro):
                self._schedule_event(coro, method, *args, **kwargs)

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ COMMAND SUBMISSION                                                 ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- bulk_update_commands ---
    # Replaces the application's global slash commands with `declarations`.
    # Fire-and-forget: the request is scheduled on the running loop and not
    # awaited. A failure is logged by `_on_submission_done`.
    # Returns: The scheduled task.
    def bulk_update_commands(self, declarations: Sequence[CommandDeclaration]) -> asyncio.Task:
        payload = [declaration.to_dict() for declaration in declarations]
        task = asyncio.create_task(
            self.http.bulk_upsert_global_commands(self.application_id, payload)
        )
        # Keep a strong reference until the request completes
        self._pending_submissions.add(task)
        task.add_done_callback(self._on_submission_done)
        return task

    def _on_submission_done(self, task: asyncio.Task) -> None:
        self._pending_submissions.discard(task)
        if task.cancelled():
            logger.warning("Slash command update was cancelled before completing")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Discord rejected the slash command update: {error}")

    # --- retrieve_commands ---
    # Fetches the global commands currently registered for this application.
    async def retrieve_commands(self) -> List[app_commands.AppCommand]:
        data = await self.http.get_global_commands(self.application_id)
        return [app_commands.AppCommand(data=entry, state=self._connection) for entry in data]

    # --- wait_for_submissions ---
    # Awaits outstanding bulk updates; used before closing the client.
    async def wait_for_submissions(self, timeout: Optional[float] = None) -> None:
        if self._pending_submissions:
            await asyncio.wait(set(self._pending_submissions), timeout=timeout)
