# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        EASYCOMMANDS LOGGING SETUP                          ║
# ║ Configures asynchronous, rotating file logging and colored console output. ║
# ║   Adds category-tagged helpers used for startup and executor diagnostics.  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import logging
import sys
import platform
import atexit
import os
import tempfile
import traceback
from enum import Enum
from logging.handlers import QueueHandler, QueueListener, MemoryHandler, TimedRotatingFileHandler
from queue import Queue

# Third-party imports
from colorlog import ColoredFormatter

# Local application imports
from easycommands.utils.environ import DEBUG, LOG_DIR, FILE_LOGGING

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOGGING CONFIGURATION AND CONSTANTS                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

LOG_FILE = os.path.join(LOG_DIR, "easycommands.log")

# Fallback directories if LOG_DIR is not writable
FALLBACK_DIRS = [
    os.path.join(os.getcwd(), "logs"),
    tempfile.gettempdir(),
]

active_log_file = None
log_dir_used = None

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOG DIRECTORY SETUP                                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- setup_log_directory ---
# Attempts to create and verify write access to the log directory.
# Tries the preferred LOG_DIR first, then iterates through FALLBACK_DIRS.
# Returns: True if a writable log directory was found and set up, False otherwise.
def setup_log_directory():
    global active_log_file, log_dir_used
    if not FILE_LOGGING:
        return False

    if os.access(os.path.dirname(LOG_DIR) or ".", os.W_OK):
        try:
            os.makedirs(LOG_DIR, exist_ok=True)
            if os.access(LOG_DIR, os.W_OK):
                active_log_file = LOG_FILE
                log_dir_used = LOG_DIR
                return True
        except OSError as e:
            # Logger is not ready yet
            print(f"Notice: Could not use preferred log directory {LOG_DIR}: {e}")

    for fallback in FALLBACK_DIRS:
        try:
            os.makedirs(fallback, exist_ok=True)
            if os.access(fallback, os.W_OK):
                active_log_file = os.path.join(fallback, "easycommands.log")
                log_dir_used = fallback
                print(f"Using fallback log directory: {fallback}")
                return True
        except OSError as e:
            print(f"Notice: Could not use fallback log directory {fallback}: {e}")
            continue

    print("WARNING: Could not find any writable log directory. File logging disabled.")
    return False

has_valid_log_dir = setup_log_directory()

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOGGER INITIALIZATION AND CONFIGURATION                                    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

logger = logging.getLogger("easycommands")
logger.setLevel(logging.DEBUG if DEBUG else logging.INFO)

# --- Prevent Re-initialization ---
# The queue handler is only attached on the first import in this process.
if not getattr(logger, '_initialized', False):
    log_queue = Queue(-1)
    queue_handler = QueueHandler(log_queue)
    logger.addHandler(queue_handler)
    handlers = []
    try:
        file_formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s in %(name)s [%(filename)s:%(lineno)d]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        console_formatter = ColoredFormatter(
            "%(log_color)s[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            }
        )

        # --- Setup File Handler (if directory is valid) ---
        if has_valid_log_dir and active_log_file:
            try:
                file_handler = TimedRotatingFileHandler(
                    active_log_file,
                    when="midnight",
                    interval=1,
                    backupCount=7,
                    encoding="utf-8",
                    delay=True
                )
                file_handler.setFormatter(file_formatter)
                file_handler.setLevel(logging.DEBUG if DEBUG else logging.INFO)

                # Buffers records and flushes on ERROR or when full
                memory_handler = MemoryHandler(
                    capacity=1000,
                    flushLevel=logging.ERROR,
                    target=file_handler
                )
                memory_handler.setLevel(logging.DEBUG)
                handlers.append(memory_handler)
            except OSError as e:
                print(f"ERROR: Failed to set up file logging handler: {e}")
                has_valid_log_dir = False

        # --- Setup Console Handler ---
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(logging.DEBUG if DEBUG else logging.INFO)
        handlers.append(console_handler)

        # --- Start Queue Listener ---
        listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
        listener.start()
        logger._listener = listener

        logger._initialized = True

        def cleanup():
            try:
                if getattr(logger, '_listener', None):
                    logger._listener.stop()
                for handler in handlers:
                    if isinstance(handler, MemoryHandler):
                        handler.flush()
                    handler.close()
            except Exception as e:
                print(f"Error during logging cleanup: {e}")

        atexit.register(cleanup)

        logger.debug(f"--- Logging Initialized ({platform.system()} {platform.release()}) ---")
        if has_valid_log_dir and log_dir_used:
            logger.debug(f"Log Directory: {log_dir_used}")

    except Exception as e:
        print(f"CRITICAL ERROR during logger initialization: {e}")
        traceback.print_exc()
        logger.handlers.clear()
        basic_handler = logging.StreamHandler(sys.stdout)
        basic_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(basic_handler)
        logger.setLevel(logging.INFO)
        logger.critical("Logging system failed to initialize properly. Using basic console logging.")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CATEGORY-TAGGED LOGGING                                                    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class LogType(Enum):
    NONE = ("", logging.INFO)
    OK = ("OK", logging.INFO)
    INFO = ("INFO", logging.INFO)
    WARNING = ("WARNING", logging.WARNING)
    ERROR = ("ERROR", logging.ERROR)
    LISTENERS = ("LISTENERS", logging.INFO)
    EXECUTORS = ("EXECUTORS", logging.INFO)
    TIMING = ("TIMING", logging.INFO)

    def __init__(self, tag: str, level: int):
        self.tag = tag
        self.level = level

# --- log ---
# Writes a message tagged with its category, e.g. "[EXECUTORS] - [Slash]".
# LogType.NONE writes the message without a tag, and so do the categories
# that only repeat the level name (INFO, WARNING, ERROR).
# Args:
#     log_type: The LogType category, which also selects the level.
#     message: The text to log.
def log(log_type: LogType, message: str):
    if log_type.tag and log_type.tag != logging.getLevelName(log_type.level):
        message = f"[{log_type.tag}] {message}"
    logger.log(log_type.level, message)

# --- get_log_file_location ---
# Returns the path to the currently active log file, or a console-only notice.
def get_log_file_location():
    if has_valid_log_dir and active_log_file:
        return active_log_file
    return "Console only (File logging disabled)"
