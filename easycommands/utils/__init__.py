"""
Shared utilities for EasyCommands: environment configuration, logging and
error handling helpers.
"""

from .logging import logger, log, LogType, get_log_file_location
from .error_handling import with_error_handling, with_async_error_handling, async_error_handler

__all__ = [
    'logger',
    'log',
    'LogType',
    'get_log_file_location',
    'with_error_handling',
    'with_async_error_handling',
    'async_error_handler',
]
