# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                           EXECUTION CONTEXTS                               ║
# ║   What an executor receives when invoked by an interaction or a message    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from typing import Any, Dict, List, Optional

import discord


# --- _role_ids ---
# Role ids of a guild member; users outside a guild have none.
def _role_ids(author) -> List[int]:
    return [role.id for role in getattr(author, "roles", None) or []]


class CommandContext:
    """Shared surface of interaction and message invocations."""

    def __init__(self, client: discord.Client, invoked_with: str):
        self.client = client
        self.invoked_with = invoked_with

    @property
    def author(self):
        raise NotImplementedError

    @property
    def channel_id(self) -> Optional[int]:
        raise NotImplementedError

    @property
    def guild(self) -> Optional[discord.Guild]:
        raise NotImplementedError

    @property
    def role_ids(self) -> List[int]:
        return _role_ids(self.author)

    async def reply(self, content: Optional[str] = None, **kwargs) -> None:
        raise NotImplementedError

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ INTERACTION CONTEXT                                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class InteractionContext(CommandContext):
    def __init__(self, client: discord.Client, interaction: discord.Interaction):
        data = interaction.data or {}
        super().__init__(client, data.get("name", ""))
        self.interaction = interaction
        self.options: Dict[str, Any] = {
            option["name"]: option.get("value")
            for option in data.get("options", [])
        }

    @property
    def author(self):
        return self.interaction.user

    @property
    def channel_id(self) -> Optional[int]:
        return self.interaction.channel_id

    @property
    def guild(self) -> Optional[discord.Guild]:
        return self.interaction.guild

    # --- reply ---
    # Sends the initial response, or a followup once the interaction was
    # already responded to or deferred.
    async def reply(self, content: Optional[str] = None, **kwargs) -> None:
        if self.interaction.response.is_done():
            await self.interaction.followup.send(content, **kwargs)
        else:
            await self.interaction.response.send_message(content, **kwargs)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ MESSAGE CONTEXT                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class MessageContext(CommandContext):
    def __init__(self, client: discord.Client, message: discord.Message, invoked_with: str, args: List[str]):
        super().__init__(client, invoked_with)
        self.message = message
        self.args = args

    @property
    def author(self):
        return self.message.author

    @property
    def channel_id(self) -> Optional[int]:
        return self.message.channel.id

    @property
    def guild(self) -> Optional[discord.Guild]:
        return self.message.guild

    async def reply(self, content: Optional[str] = None, **kwargs) -> None:
        # `ephemeral` only exists for interactions
        kwargs.pop("ephemeral", None)
        await self.message.reply(content, **kwargs)
