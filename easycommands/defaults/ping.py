# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                           DEFAULT !ping EXECUTOR                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

import math

from easycommands.context import CommandContext
from easycommands.executors import MessageExecutor


class PingCmd(MessageExecutor):
    name = "ping"
    description = "Replies with the gateway latency"
    aliases = ["p"]

    async def execute(self, context: CommandContext) -> None:
        latency = context.client.latency
        # latency is nan until the first heartbeat is acknowledged
        if latency is None or math.isnan(latency) or math.isinf(latency):
            await context.reply("🏓 Pong!")
            return
        await context.reply(f"🏓 Pong! {latency * 1000:.0f}ms")
