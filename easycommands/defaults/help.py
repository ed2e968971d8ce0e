# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                           DEFAULT /help EXECUTOR                           ║
# ║    Lists every registered executor with its description and aliases       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import discord

from easycommands.context import CommandContext
from easycommands.executors import Executor, SlashExecutor
from easycommands.options import OptionData
from easycommands.registry import ExecutorRegistry
from easycommands.utils.environ import COMMAND_PREFIX

# Discord rejects embeds with more fields than this
MAX_EMBED_FIELDS = 25


class HelpCmd(SlashExecutor):
    name = "help"
    description = "Shows the available commands"

    def __init__(self, registry: ExecutorRegistry, prefix: str = COMMAND_PREFIX, **kwargs):
        super().__init__(**kwargs)
        self.registry = registry
        self.prefix = prefix

    def get_options(self):
        return [
            OptionData(
                discord.AppCommandOptionType.string,
                "command",
                "Show the details of a single command",
                required=False
            )
        ]

    # --- usage ---
    # How an executor is invoked: "/name" for slash, "<prefix>name" otherwise.
    def usage(self, executor: Executor) -> str:
        if executor.is_slash():
            return f"/{executor.name}"
        return f"{self.prefix}{executor.name}"

    def describe(self, executor: Executor) -> str:
        lines = [executor.description or "*No description*"]
        if executor.aliases:
            lines.append("Aliases: " + ", ".join(f"`{alias}`" for alias in executor.aliases))
        return "\n".join(lines)

    # --- strip_invocation ---
    # Turns "/help" or "<prefix>ping" into the registry key.
    def strip_invocation(self, key: str) -> str:
        if key.startswith("/"):
            return key[1:]
        if self.prefix and key.startswith(self.prefix):
            return key[len(self.prefix):]
        return key

    # --- build_embed ---
    # Builds the help embed, for one command when `key` is given.
    # Returns: The embed, or None when `key` names no registered executor.
    def build_embed(self, key=None):
        if key:
            executor = self.registry.get(self.strip_invocation(key))
            if executor is None:
                return None
            embed = discord.Embed(title=f"📖 {self.usage(executor)}", color=discord.Color.blurple())
            embed.description = self.describe(executor)
            embed.set_footer(text=executor.kind)
            return embed

        embed = discord.Embed(title="📖 Commands", color=discord.Color.blurple())
        executors = [executor for executor in self.registry.unique() if executor.name]
        for executor in executors[:MAX_EMBED_FIELDS]:
            embed.add_field(name=self.usage(executor), value=self.describe(executor), inline=False)
        if len(executors) > MAX_EMBED_FIELDS:
            embed.set_footer(text=f"… and {len(executors) - MAX_EMBED_FIELDS} more")
        return embed

    async def execute(self, context: CommandContext) -> None:
        key = getattr(context, "options", {}).get("command")
        embed = self.build_embed(key)
        if embed is None:
            await context.reply(f"❓ No command named `{key}`.", ephemeral=True)
            return
        await context.reply(embed=embed, ephemeral=True)
