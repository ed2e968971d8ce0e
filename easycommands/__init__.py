# EasyCommands Package
"""
EasyCommands - executor registration and slash command sync for discord.py

Register executors on an `EasyCommands` facade, build it, and the facade
connects, pushes slash command declarations to Discord and routes slash
interactions and prefixed messages to the registered executors.
"""

__version__ = "1.0.0"

from .bootstrap import EasyCommands, FacadeState, DEFAULT_INTENTS
from .client import EasyClient, Listener
from .context import CommandContext, InteractionContext, MessageContext
from .exceptions import EasyCommandsError, ConfigurationError, ConnectionFailedError
from .executors import Executor, SlashExecutor, MessageExecutor
from .listeners import SlashCommandListener, MessageCommandListener
from .options import OptionData, OptionChoice, CommandDeclaration
from .registry import ExecutorRegistry
from .sync import CommandSynchronizer

__all__ = [
    'EasyCommands', 'FacadeState', 'DEFAULT_INTENTS',
    'EasyClient', 'Listener',
    'CommandContext', 'InteractionContext', 'MessageContext',
    'EasyCommandsError', 'ConfigurationError', 'ConnectionFailedError',
    'Executor', 'SlashExecutor', 'MessageExecutor',
    'SlashCommandListener', 'MessageCommandListener',
    'OptionData', 'OptionChoice', 'CommandDeclaration',
    'ExecutorRegistry',
    'CommandSynchronizer',
]
