"""Named-command dispatch with a bounded history."""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger


@dataclass(frozen=True)
class CommandRecord:
    """One executed command."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)
    result: Any = None


class CommandRegistry:
    """Map command names to handlers and remember what ran.

    Handlers are called with keyword arguments only. Errors raised by a
    handler propagate to the caller and the call is not recorded.
    """

    def __init__(self, *, history_limit: int) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}
        self._history: deque[CommandRecord] = deque(maxlen=history_limit)

    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        if not callable(handler):
            msg = f"Command handler for {name!r} must be callable"
            raise TypeError(msg)
        self._handlers[name] = handler

    def has_command(self, name: str) -> bool:
        return name in self._handlers

    @property
    def command_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def execute_command(self, name: str, **args: Any) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            msg = f"Unknown command: {name!r}"
            raise KeyError(msg)

        logger.debug("Executing command {} {!r}", name, args)
        result = handler(**args)
        self._history.append(CommandRecord(name=name, args=dict(args), result=result))
        return result

    @property
    def command_history(self) -> tuple[CommandRecord, ...]:
        return tuple(self._history)

    def clear_history(self) -> None:
        self._history.clear()
