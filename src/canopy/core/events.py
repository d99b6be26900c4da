"""Outbound notification channel with nestable batch boundaries."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from loguru import logger

from canopy.models.events import BatchChanged, TreeEvent
from canopy.protocols import Listener


class EventChannel:
    """Deliver tagged notifications to listeners, aggregating inside batches.

    Outside a batch every tracked notification is delivered immediately.
    Inside one, notifications are queued; when the outermost batch closes a
    single ``BatchChanged`` carrying them in order is delivered. A batch that
    tracked nothing delivers nothing.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._pending: list[TreeEvent] = []
        self._depth = 0

    @property
    def batch_depth(self) -> int:
        return self._depth

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def begin_batch(self) -> None:
        if self._depth == 0:
            self._pending = []
        self._depth += 1

    def end_batch(self) -> None:
        if self._depth == 0:
            return
        self._depth -= 1
        if self._depth > 0:
            return

        changes = tuple(self._pending)
        self._pending = []
        if changes:
            logger.debug("Batch closed with {} change(s)", len(changes))
            self._deliver(BatchChanged(changes=changes))

    @contextmanager
    def batch(self) -> Iterator[None]:
        self.begin_batch()
        try:
            yield
        finally:
            self.end_batch()

    def track(self, event: TreeEvent) -> None:
        """Queue the event inside a batch, otherwise deliver it now."""
        if self._depth > 0:
            self._pending.append(event)
        else:
            self._deliver(event)

    def _deliver(self, event: TreeEvent) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener {!r} failed on {}", listener, event.type)


def iter_changes(event: TreeEvent) -> Iterator[TreeEvent]:
    """Yield the plain notifications an event stands for, unpacking batches."""
    if isinstance(event, BatchChanged):
        for change in event.changes:
            yield from iter_changes(change)
    else:
        yield event
