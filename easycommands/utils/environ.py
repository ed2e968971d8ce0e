# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                       ENVIRONMENT CONFIGURATION                            ║
# ║    Centralized access and type conversion for environment variables.       ║
# ║       Includes helpers for boolean, integer, and string values.            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import os
from typing import Optional

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ HELPER FUNCTIONS                                                           ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- get_bool_env ---
# Retrieves an environment variable and interprets it as a boolean.
# Considers '1', 'true', 'yes' (case-insensitive) as True.
# Args:
#     var_name: The name of the environment variable.
#     default: The default boolean value if the variable is not set.
# Returns: The boolean value of the environment variable or the default.
def get_bool_env(var_name: str, default: bool = False) -> bool:
    val = os.getenv(var_name, str(default)).lower()
    return val in ("1", "true", "yes")

# --- get_int_env ---
# Retrieves an environment variable and converts it to an integer.
# Args:
#     var_name: The name of the environment variable.
#     default: The default integer value if the variable is not set or invalid.
# Returns: The integer value of the environment variable or the default.
def get_int_env(var_name: str, default: int = 0) -> int:
    val_str = os.getenv(var_name)
    if val_str is None:
        return default
    try:
        return int(val_str)
    except ValueError:
        return default

# --- get_str_env ---
# Retrieves an environment variable as a string.
# Args:
#     var_name: The name of the environment variable.
#     default: The default string value if the variable is not set.
# Returns: The string value of the environment variable or the default.
def get_str_env(var_name: str, default: Optional[str] = "") -> Optional[str]:
    return os.getenv(var_name, default)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CORE CONFIGURATION VARIABLES                                               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Debug mode flag (controls verbose logging)
DEBUG: bool = get_bool_env("DEBUG", False)

# Discord Bot Token (required to build a connection from main.py)
DISCORD_BOT_TOKEN: Optional[str] = get_str_env("DISCORD_BOT_TOKEN", None)

# Prefix for text-style (message) executors, e.g. '!ping'
COMMAND_PREFIX: str = get_str_env("COMMAND_PREFIX", "!")

# Preferred log directory (often mounted in Docker)
LOG_DIR: str = get_str_env("EASYCOMMANDS_LOG_DIR", "/data/logs")

# Keep a log file at all; disabled in CI/test runs
FILE_LOGGING: bool = get_bool_env("EASYCOMMANDS_FILE_LOGGING", True)
