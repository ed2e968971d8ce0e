# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        EASYCOMMANDS BOOTSTRAP FACADE                       ║
# ║   Collects configuration and executors, connects, syncs, logs the result   ║
# ╚════════════════════════════════════════════════════════════════════════════╝
"""
Typical use from synchronous code::

    easy = EasyCommands(token)
    client = easy.add_executor(HelpCmd(easy.registry)).add_gateway_intents("presences").build()
    easy.block()

or from a coroutine with ``client = await easy.start()``.
"""

import asyncio
import threading
import time
from enum import Enum
from typing import List, Mapping, Optional

import discord

from easycommands.client import EasyClient, Listener
from easycommands.exceptions import ConfigurationError, ConnectionFailedError
from easycommands.executors import Executor
from easycommands.listeners import MessageCommandListener, SlashCommandListener
from easycommands.options import CommandDeclaration
from easycommands.registry import ExecutorRegistry
from easycommands.sync import CommandSynchronizer
from easycommands.utils.environ import COMMAND_PREFIX
from easycommands.utils.error_handling import with_async_error_handling
from easycommands.utils.logging import log, logger, LogType

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ DEFAULTS & STATE                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Voice states, reactions, messages and members, plus what prefix commands need
DEFAULT_INTENTS = [
    "guilds",
    "guild_messages",
    "guild_reactions",
    "voice_states",
    "members",
    "message_content",
]


class FacadeState(Enum):
    UNCONFIGURED = 0
    CONFIGURING = 1
    CONNECTING = 2
    READY = 3
    SYNCED = 4

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ FACADE                                                                     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class EasyCommands:
    def __init__(self, token: Optional[str], prefix: str = COMMAND_PREFIX, load_default_intents: bool = True):
        if not token:
            raise ConfigurationError("A Discord bot token is required")
        self._token = token

        self.registry = ExecutorRegistry()
        self.synchronizer = CommandSynchronizer()

        self.gateway_intents: List[str] = []
        self.enabled_cache_flags: List[str] = []
        self.disabled_cache_flags: List[str] = []
        self.listeners: List[Listener] = []

        self.client: Optional[EasyClient] = None
        self.state = FacadeState.UNCONFIGURED
        self.last_declarations: List[CommandDeclaration] = []

        self._gateway_task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_thread: Optional[threading.Thread] = None

        if load_default_intents:
            self.gateway_intents.extend(DEFAULT_INTENTS)

        self.slash_commands = SlashCommandListener(self.registry)
        self.message_commands = MessageCommandListener(self.registry, prefix)
        self.listeners.extend([self.slash_commands, self.message_commands])

    # --- _configuring ---
    # Moves UNCONFIGURED to CONFIGURING. Configuration added after a build
    # only applies to the next build.
    def _configuring(self, what: str) -> None:
        if self.state == FacadeState.UNCONFIGURED:
            self.state = FacadeState.CONFIGURING
        elif self.state != FacadeState.CONFIGURING:
            log(LogType.WARNING, f"{what} added after build; it applies on the next build.")

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ CONFIGURATION ACCUMULATION                                         ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- add_gateway_intents ---
    # Args:
    #     *intents: discord.Intents flag names, e.g. "presences", "members".
    # Raises: ConfigurationError for a name discord.py does not know.
    def add_gateway_intents(self, *intents: str) -> "EasyCommands":
        for intent in intents:
            if intent not in discord.Intents.VALID_FLAGS:
                raise ConfigurationError(f"Unknown gateway intent: {intent!r}")
        self._configuring("Gateway intents")
        self.gateway_intents.extend(intents)
        return self

    # --- add_enabled_cache_flags / add_disabled_cache_flags ---
    # Args:
    #     *flags: discord.MemberCacheFlags flag names ("voice", "joined").
    def add_enabled_cache_flags(self, *flags: str) -> "EasyCommands":
        self._check_cache_flags(flags)
        self._configuring("Cache flags")
        self.enabled_cache_flags.extend(flags)
        return self

    def add_disabled_cache_flags(self, *flags: str) -> "EasyCommands":
        self._check_cache_flags(flags)
        self._configuring("Cache flags")
        self.disabled_cache_flags.extend(flags)
        return self

    @staticmethod
    def _check_cache_flags(flags) -> None:
        for flag in flags:
            if flag not in discord.MemberCacheFlags.VALID_FLAGS:
                raise ConfigurationError(f"Unknown cache flag: {flag!r}")

    def register_listeners(self, *listeners: Listener) -> "EasyCommands":
        if not listeners:
            return self
        self._configuring("Listeners")
        self.listeners.extend(listeners)
        return self

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ EXECUTORS                                                          ║
    # ╚════════════════════════════════════════════════════════════════════╝

    def add_executor(self, *executors: Executor) -> "EasyCommands":
        self._configuring("Executors")
        self.registry.add(*executors)
        return self

    def clear_executors(self) -> "EasyCommands":
        self.registry.clear()
        return self

    @property
    def executors(self) -> Mapping[str, Executor]:
        return self.registry.all()

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ CLIENT CONSTRUCTION                                                ║
    # ╚════════════════════════════════════════════════════════════════════╝

    def build_intents(self) -> discord.Intents:
        intents = discord.Intents.none()
        for intent in self.gateway_intents:
            setattr(intents, intent, True)
        return intents

    # --- build_member_cache_flags ---
    # Starts from what the intents allow, then applies enabled and disabled
    # flags in that order; a flag present in both ends up disabled.
    def build_member_cache_flags(self, intents: discord.Intents) -> discord.MemberCacheFlags:
        flags = discord.MemberCacheFlags.from_intents(intents)
        for flag in self.enabled_cache_flags:
            setattr(flags, flag, True)
        for flag in self.disabled_cache_flags:
            setattr(flags, flag, False)
        return flags

    def create_client(self) -> EasyClient:
        intents = self.build_intents()
        try:
            client = EasyClient(intents=intents, member_cache_flags=self.build_member_cache_flags(intents))
        except ValueError as e:
            # discord.py rejects cache flags whose intent is missing
            raise ConfigurationError(str(e)) from e
        for listener in self.listeners:
            client.add_listener(listener)
        return client

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ ASYNC LIFECYCLE                                                    ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- start ---
    # Connects, waits for the session to be ready, syncs commands once and
    # logs what Discord has registered. The gateway keeps running afterwards.
    # Returns: The ready client.
    # Raises: discord.LoginFailure, ConnectionFailedError or whatever the
    #         gateway raised before becoming ready.
    async def start(self) -> EasyClient:
        started = time.perf_counter()
        if self.client is not None and not self.client.is_closed():
            logger.info("Closing previous connection before rebuilding")
            await self.close()

        self.state = FacadeState.CONNECTING
        client = self.create_client()
        self.client = client

        try:
            await client.login(self._token)
        except Exception:
            await client.close()
            raise
        self._gateway_task = asyncio.create_task(client.connect(), name="easycommands-gateway")
        await self._wait_until_ready(client, self._gateway_task)
        self.state = FacadeState.READY

        loading_started = time.perf_counter()
        log(LogType.NONE, "------- Loading EasyCommands -------")
        log(LogType.LISTENERS, str(client.registered_listeners))

        self.last_declarations = self.update_commands()
        self.state = FacadeState.SYNCED
        await with_async_error_handling(
            self.log_current_executors,
            error_message="Could not read back registered commands"
        )

        finished = time.perf_counter()
        log(
            LogType.OK,
            f"EasyCommands finished loading in {(finished - loading_started) * 1000:.0f}ms. "
            f"Total: {(finished - started) * 1000:.0f}ms."
        )
        self._gateway_task.add_done_callback(self._on_gateway_done)
        return client

    # --- _wait_until_ready ---
    # Blocks until READY, or fails if the gateway task ends first.
    @staticmethod
    async def _wait_until_ready(client: EasyClient, gateway_task: asyncio.Task) -> None:
        ready_task = asyncio.create_task(client.wait_until_ready())
        done, _ = await asyncio.wait({gateway_task, ready_task}, return_when=asyncio.FIRST_COMPLETED)
        if ready_task in done:
            return

        ready_task.cancel()
        await client.close()
        error = None if gateway_task.cancelled() else gateway_task.exception()
        if error is not None:
            raise error
        raise ConnectionFailedError("Gateway closed before the session became ready")

    def _on_gateway_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Gateway connection stopped with an error: {error}")
        else:
            logger.info("Gateway connection closed")

    # --- update_commands ---
    # One synchronizer pass over the registry against the live client.
    def update_commands(self) -> List[CommandDeclaration]:
        return self.synchronizer.sync(self.registry, self.client)

    # --- log_current_executors ---
    # Diagnostic read-back of the slash commands Discord currently holds.
    # The bulk update is not awaited, so this may still show the previous set.
    async def log_current_executors(self) -> None:
        commands = await self.client.retrieve_commands()
        log(LogType.EXECUTORS, "- Logging registered Executors")
        log(LogType.NONE, "- [Slash]")
        for command in commands:
            log(LogType.NONE, f"/{command.name}:{command.id}")

    async def wait_closed(self) -> None:
        if self._gateway_task is not None:
            await asyncio.gather(self._gateway_task, return_exceptions=True)

    async def close(self) -> None:
        if self.client is None:
            return
        await self.client.wait_for_submissions(timeout=5)
        await self.client.close()
        await self.wait_closed()

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ BLOCKING LIFECYCLE                                                 ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- _ensure_loop ---
    # Starts a background event loop thread for the blocking API.
    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
            self._loop_thread = threading.Thread(
                target=self._loop.run_forever,
                name="easycommands-loop",
                daemon=True
            )
            self._loop_thread.start()
        return self._loop

    # --- run ---
    # Runs a coroutine on the background loop and blocks for its result,
    # e.g. `easy.run(client.change_presence(...))`.
    def run(self, coro):
        return asyncio.run_coroutine_threadsafe(coro, self._ensure_loop()).result()

    # --- build ---
    # Blocking counterpart of `start()`: returns once the session is ready
    # and commands were synced. Connection errors propagate to the caller.
    def build(self) -> EasyClient:
        return self.run(self.start())

    # --- block ---
    # Blocks the calling thread until the gateway connection ends.
    def block(self) -> None:
        self.run(self.wait_closed())

    # --- shutdown ---
    # Closes the client and stops the background loop started by `build()`.
    def shutdown(self) -> None:
        if self._loop is None or self._loop.is_closed():
            return
        self.run(self.close())
        self._loop.call_soon_threadsafe(self._loop.stop)
        if self._loop_thread is not None:
            self._loop_thread.join(timeout=5)
        self._loop.close()
        self._loop = None
