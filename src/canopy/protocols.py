"""Capability protocols implemented by tree state holders."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from canopy.models.events import TreeEvent

Listener = Callable[[TreeEvent], None]


@runtime_checkable
class ObservableState(Protocol):
    """Protocol for state holders that publish tagged notifications."""

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that unregisters it."""
        ...

    def begin_batch(self) -> None:
        """Open (or nest) a batch boundary."""
        ...

    def end_batch(self) -> None:
        """Close a batch boundary, flushing one aggregate at depth zero."""
        ...

    def batch(self) -> AbstractContextManager[None]:
        """Context manager wrapping begin_batch/end_batch."""
        ...


@runtime_checkable
class CommandDispatcher(Protocol):
    """Protocol for components that run named commands."""

    def register_command(self, name: str, handler: Callable[..., Any]) -> None:
        """Register (or replace) the handler for a command name."""
        ...

    def execute_command(self, name: str, **args: Any) -> Any:
        """Run a registered command and return its result."""
        ...

    def has_command(self, name: str) -> bool:
        """Return True when a handler is registered under name."""
        ...
