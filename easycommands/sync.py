# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                          COMMAND SYNCHRONIZER                              ║
# ║  Builds slash declarations from the registry and pushes them in one batch  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

from typing import List

from easycommands.executors import Executor, SlashExecutor
from easycommands.options import CommandDeclaration
from easycommands.registry import ExecutorRegistry
from easycommands.utils.error_handling import with_error_handling
from easycommands.utils.logging import logger

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ REFRESH HELPERS                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝
# Hooks are integrator code. A failing hook is logged and the executor keeps
# its previous values, so one broken executor cannot block the batch.

@with_error_handling(default_value=False, error_message="Option refresh failed")
def refresh_options(executor: SlashExecutor) -> bool:
    executor.update_options()
    return True


@with_error_handling(default_value=False, error_message="Alias/authorization refresh failed")
def refresh_access(executor: Executor, connection) -> bool:
    executor.update_aliases(connection)
    executor.update_authorized_channels(connection)
    executor.update_authorized_roles(connection)
    return True

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SYNCHRONIZER                                                               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class CommandSynchronizer:
    # --- sync ---
    # Walks every distinct executor once:
    #   1. slash-style executors that still own their primary name refresh
    #      their option schema and contribute one declaration under it;
    #   2. every executor refreshes its aliases, authorized channels and
    #      authorized roles against the live connection.
    # Then submits all declarations through a single bulk update. The
    # submission is not awaited here.
    # Args:
    #     registry: The executor registry to read.
    #     connection: The live client; must already be ready.
    # Returns: The declarations that were submitted.
    def sync(self, registry: ExecutorRegistry, connection) -> List[CommandDeclaration]:
        declarations: List[CommandDeclaration] = []

        for executor in registry.unique():
            slash = executor.as_slash()
            if slash is not None and registry.get(slash.name or "") is slash:
                refresh_options(slash)
                declarations.append(slash.to_declaration())
            elif slash is not None:
                logger.warning(
                    f"Command: '{slash.name}' is only reachable through its aliases; not declaring it."
                )
            refresh_access(executor, connection)

        logger.debug(f"Submitting {len(declarations)} slash command declaration(s)")
        connection.bulk_update_commands(declarations)
        return declarations
