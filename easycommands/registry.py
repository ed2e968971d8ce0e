# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                            EXECUTOR REGISTRY                               ║
# ║   Maps every invocation key (primary name and aliases) to its executor     ║
# ╚════════════════════════════════════════════════════════════════════════════╝
"""
The registry never rejects an executor. Missing names, missing
descriptions, empty aliases and key collisions are logged as warnings and
registration carries on, so cosmetic metadata problems never abort startup.
"""

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from easycommands.executors import Executor
from easycommands.utils.logging import log, LogType


class ExecutorRegistry:
    def __init__(self):
        self._executors: Dict[str, Executor] = {}

    def __len__(self) -> int:
        return len(self._executors)

    def __contains__(self, key: object) -> bool:
        return key in self._executors

    def __iter__(self) -> Iterator[str]:
        return iter(self._executors)

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ MUTATION                                                           ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- add ---
    # Registers each executor under its name and every one of its aliases.
    # An existing key is overwritten (last write wins) with a warning.
    # Args:
    #     *executors: The executors to register.
    # Returns: The registry, for chaining.
    def add(self, *executors: Executor) -> "ExecutorRegistry":
        for executor in executors:
            label = type(executor).__name__
            name = getattr(executor, "name", None)
            description = getattr(executor, "description", None)

            if not name:
                log(LogType.WARNING, f"Command: '{label}' doesn't have a name and could cause errors.")
            if not description:
                log(LogType.WARNING, f"Command: '{label}' doesn't have a description.")

            self._put(name or "", executor)

            for alias in getattr(executor, "aliases", None) or ():
                if not alias:
                    log(LogType.WARNING, f"Alias of '{label}' doesn't have a name and could cause errors.")
                self._put(alias or "", executor)
        return self

    # --- _put ---
    # Inserts a single key, warning when it replaces a different executor.
    def _put(self, key: str, executor: Executor) -> None:
        previous = self._executors.get(key)
        if previous is not None and previous is not executor:
            log(
                LogType.WARNING,
                f"Key '{key}' was registered by '{type(previous).__name__}' "
                f"and is now overwritten by '{type(executor).__name__}'."
            )
        self._executors[key] = executor

    def clear(self) -> "ExecutorRegistry":
        self._executors.clear()
        return self

    # ╔════════════════════════════════════════════════════════════════════╗
    # ║ LOOKUP                                                             ║
    # ╚════════════════════════════════════════════════════════════════════╝

    # --- all ---
    # Read-only view over the current key -> executor entries.
    def all(self) -> Mapping[str, Executor]:
        return MappingProxyType(self._executors)

    def get(self, key: str) -> Optional[Executor]:
        return self._executors.get(key)

    # --- unique ---
    # Distinct executors in first-registration order. An executor reachable
    # through several aliases appears once.
    def unique(self) -> List[Executor]:
        seen = set()
        executors = []
        for executor in self._executors.values():
            if id(executor) in seen:
                continue
            seen.add(id(executor))
            executors.append(executor)
        return executors
