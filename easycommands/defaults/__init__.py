"""Ready-made executors integrators can register as-is."""

from .help import HelpCmd
from .ping import PingCmd

__all__ = [
    'HelpCmd',
    'PingCmd',
]
