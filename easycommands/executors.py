# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                           EXECUTOR BASE CLASSES                            ║
# ║  Named command handlers: metadata, authorization and refresh hooks         ║
# ╚════════════════════════════════════════════════════════════════════════════╝
"""
Executors are supplied by integrators. A subclass declares its metadata
either as class attributes::

    class PingCmd(MessageExecutor):
        name = "ping"
        description = "Replies with the gateway latency"
        aliases = ["p"]

        async def execute(self, context):
            await context.reply("Pong!")

or by passing it to the constructor. The refresh hooks (`update_aliases`,
`update_authorized_channels`, `update_authorized_roles`) are called by the
command synchronizer with the live connection after every connect.
"""

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from easycommands.options import CommandDeclaration, OptionData

if TYPE_CHECKING:
    from easycommands.context import CommandContext

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ EXECUTOR                                                                   ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class Executor:
    name: Optional[str] = ""
    description: Optional[str] = ""
    aliases: Sequence[str] = ()
    authorized_channels: Sequence[int] = ()
    authorized_roles: Sequence[int] = ()

    kind = "Executor"

    def __init__(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        aliases: Optional[Iterable[str]] = None,
        authorized_channels: Optional[Iterable[int]] = None,
        authorized_roles: Optional[Iterable[int]] = None,
    ):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        # Copies so instances never share the class-level sequences
        self.aliases = list(aliases if aliases is not None else self.aliases or ())
        self.authorized_channels = list(
            authorized_channels if authorized_channels is not None else self.authorized_channels
        )
        self.authorized_roles = list(
            authorized_roles if authorized_roles is not None else self.authorized_roles
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} aliases={list(self.aliases)!r}>"

    # --- Capability queries ---
    def is_slash(self) -> bool:
        return False

    def as_slash(self) -> Optional["SlashExecutor"]:
        return None

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ OVERRIDABLE SOURCES                                                ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- get_aliases ---
    # Source of truth for the alias list. Override to compute aliases dynamically.
    def get_aliases(self) -> List[str]:
        return list(self.aliases)

    # --- get_authorized_channels ---
    # Channel ids this executor may run in; an empty list means everywhere.
    # Override to resolve channels from the live connection (e.g. by name).
    def get_authorized_channels(self, connection) -> List[int]:
        return list(self.authorized_channels)

    # --- get_authorized_roles ---
    # Role ids allowed to run this executor; an empty list means everyone.
    def get_authorized_roles(self, connection) -> List[int]:
        return list(self.authorized_roles)

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ REFRESH HOOKS (called on every sync)                               ║
    # ╚════════════════════════════════════════════════════════════════════╝

    def update_aliases(self, connection) -> None:
        self.aliases = list(self.get_aliases())

    def update_authorized_channels(self, connection) -> None:
        self.authorized_channels = list(self.get_authorized_channels(connection))

    def update_authorized_roles(self, connection) -> None:
        self.authorized_roles = list(self.get_authorized_roles(connection))

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ AUTHORIZATION & EXECUTION                                          ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- is_authorized ---
    # Checks the invoking channel and the invoker's role ids against the
    # authorized lists. Either list being empty leaves that axis unrestricted.
    # Args:
    #     channel_id: Id of the channel the command was used in.
    #     role_ids: Ids of the invoking member's roles (empty in DMs).
    # Returns: True if the invocation is allowed.
    def is_authorized(self, channel_id: Optional[int], role_ids: Iterable[int]) -> bool:
        if self.authorized_channels and channel_id not in self.authorized_channels:
            return False
        if self.authorized_roles and not set(self.authorized_roles).intersection(role_ids):
            return False
        return True

    async def execute(self, context: "CommandContext") -> None:
        raise NotImplementedError(f"{type(self).__name__} does not implement execute()")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SLASH EXECUTOR                                                             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class SlashExecutor(Executor):
    """An executor declared to Discord as a top-level slash command."""

    options: Sequence[OptionData] = ()

    kind = "Slash"

    def __init__(self, *args, options: Optional[Iterable[OptionData]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.options = list(options if options is not None else self.options)

    def is_slash(self) -> bool:
        return True

    def as_slash(self) -> "SlashExecutor":
        return self

    # --- get_options ---
    # Source of truth for the option schema. Override to build it dynamically.
    def get_options(self) -> List[OptionData]:
        return list(self.options)

    def update_options(self) -> None:
        self.options = list(self.get_options())

    # --- to_declaration ---
    # Builds the declaration pushed to Discord, always under the primary name.
    def to_declaration(self) -> CommandDeclaration:
        return CommandDeclaration(
            name=self.name or "",
            description=self.description or "",
            options=list(self.options),
        )

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ MESSAGE EXECUTOR                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class MessageExecutor(Executor):
    """A text-style executor invoked as `<prefix><name or alias> args...`."""

    kind = "Message"
