# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                   EASYCOMMANDS ERROR HANDLING UTILITIES                     ║
# ║   Standardized error handling decorators for hooks and event handlers.     ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import functools
from typing import Callable, TypeVar, Any

# Local application imports
from easycommands.utils.logging import logger

# Type variable for generic function return types
T = TypeVar('T')

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SYNCHRONOUS ERROR HANDLING DECORATOR                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- with_error_handling ---
# Decorator factory for standardized error handling in synchronous functions.
# Catches exceptions, logs them with a traceback, and returns a default value.
# Args:
#     default_value: The value to return if an exception occurs.
#     error_message: A prefix for the log message when an error occurs.
# Returns: A decorator function.
def with_error_handling(
    default_value: Any = None,
    error_message: str = "An error occurred"
) -> Callable:
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"{error_message} in {func.__name__}: {str(e)}")
                return default_value
        return wrapper
    return decorator

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ ASYNCHRONOUS ERROR HANDLING                                                ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- with_async_error_handling ---
# Awaits `coro_func(*args, **kwargs)`; on failure logs it and returns a default.
# Args:
#     coro_func: The async function to execute.
#     default_value: The value to return if an exception occurs.
#     error_message: A prefix for the log message when an error occurs.
# Returns: The result of the awaitable or the default value on error.
async def with_async_error_handling(
    coro_func,
    *args,
    default_value: Any = None,
    error_message: str = "An async error occurred",
    **kwargs
) -> Any:
    try:
        return await coro_func(*args, **kwargs)
    except Exception as e:
        logger.exception(f"{error_message} in {coro_func.__name__}: {str(e)}")
        return default_value

# --- async_error_handler ---
# Decorator factory for standardized error handling in asynchronous functions.
# Uses the `with_async_error_handling` helper.
def async_error_handler(
    default_value: Any = None,
    error_message: str = "An async error occurred"
) -> Callable:
    def decorator(coro_func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(coro_func)
        async def wrapper(*args, **kwargs):
            return await with_async_error_handling(
                coro_func,
                *args,
                default_value=default_value,
                error_message=error_message,
                **kwargs
            )
        return wrapper
    return decorator
