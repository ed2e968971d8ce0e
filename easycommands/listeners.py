# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        COMMAND DISPATCH LISTENERS                          ║
# ║  Route slash interactions and prefixed messages to registered executors    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import discord

from easycommands.client import Listener
from easycommands.context import CommandContext, InteractionContext, MessageContext
from easycommands.executors import Executor
from easycommands.registry import ExecutorRegistry
from easycommands.utils.environ import COMMAND_PREFIX
from easycommands.utils.error_handling import async_error_handler
from easycommands.utils.logging import logger

UNAUTHORIZED_MESSAGE = "⛔ You are not allowed to use this command here."
FAILURE_MESSAGE = "⚠️ Something went wrong while running this command."

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SHARED DISPATCH                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class CommandListener(Listener):
    def __init__(self, registry: ExecutorRegistry):
        self.registry = registry

    # --- run_executor ---
    # Checks authorization and runs the executor. A failing executor is
    # logged and reported to the invoker; it never reaches the gateway loop.
    # Returns: True if the executor ran to completion.
    async def run_executor(self, executor: Executor, context: CommandContext) -> bool:
        if not executor.is_authorized(context.channel_id, context.role_ids):
            logger.info(f"Denied '{context.invoked_with}' for {context.author} in channel {context.channel_id}")
            await context.reply(UNAUTHORIZED_MESSAGE, ephemeral=True)
            return False
        try:
            await executor.execute(context)
            return True
        except Exception as e:
            logger.exception(f"Executor '{executor.name}' failed on '{context.invoked_with}': {e}")
            await context.reply(FAILURE_MESSAGE, ephemeral=True)
            return False

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SLASH COMMANDS                                                             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class SlashCommandListener(CommandListener):
    @async_error_handler(error_message="Error dispatching slash command")
    async def on_interaction(self, interaction: discord.Interaction):
        if interaction.type != discord.InteractionType.application_command:
            return
        data = interaction.data or {}
        # Only chat-input commands; user and message context menus are ignored
        if data.get("type", 1) != discord.AppCommandType.chat_input.value:
            return

        name = data.get("name", "")
        executor = self.registry.get(name)
        if executor is None or not executor.is_slash():
            logger.warning(f"Received unknown slash command '/{name}'")
            await interaction.response.send_message(f"❓ Unknown command `/{name}`.", ephemeral=True)
            return

        logger.debug(f"Dispatching /{name} from {interaction.user}")
        await self.run_executor(executor, InteractionContext(self.client, interaction))

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ MESSAGE COMMANDS                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class MessageCommandListener(CommandListener):
    def __init__(self, registry: ExecutorRegistry, prefix: str = COMMAND_PREFIX):
        super().__init__(registry)
        self.prefix = prefix

    @async_error_handler(error_message="Error dispatching message command")
    async def on_message(self, message: discord.Message):
        if message.author.bot or not self.prefix or not message.content.startswith(self.prefix):
            return

        parts = message.content[len(self.prefix):].split()
        if not parts:
            return
        key, args = parts[0], parts[1:]

        executor = self.registry.get(key)
        # Slash-style executors are only reachable through interactions
        if executor is None or executor.is_slash():
            return

        logger.debug(f"Dispatching {self.prefix}{key} from {message.author}")
        await self.run_executor(executor, MessageContext(self.client, message, key, args))
