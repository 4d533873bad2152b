"""
One-way channels that carry level snapshots from the engine to views.

Each channel holds at most one unread snapshot. Publishing while the previous
snapshot is still unread blocks the engine until the view catches up, so the
slowest view sets the pace of the whole loop.
"""

import itertools
import logging
import queue
from typing import Iterator, Optional

from turnkeep.world.level import LevelSnapshot

logger = logging.getLogger(__name__)

_channel_ids = itertools.count()
_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when publishing to a channel that has been closed."""


class ViewChannel:
    """Snapshot channel owned by a single view."""

    def __init__(self, name: Optional[str] = None):
        self.channel_id = next(_channel_ids)
        self.name = name or f"view-{self.channel_id}"
        self.closed = False
        self._queue: "queue.Queue" = queue.Queue(maxsize=1)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"ViewChannel({self.name}, {state})"

    def publish(self, snapshot: LevelSnapshot, timeout: Optional[float] = None):
        """Hand a snapshot to the view, blocking while it is busy.

        Raises queue.Full if `timeout` is given and the view does not take the
        previous snapshot in time.
        """
        if self.closed:
            raise ChannelClosedError(f"{self.name} is closed")
        self._queue.put(snapshot, timeout=timeout)

    def receive(self, timeout: Optional[float] = None) -> Optional[LevelSnapshot]:
        """Wait for the next snapshot. Returns None once the channel is closed.

        Raises queue.Empty if `timeout` is given and nothing arrives.
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # Leave the marker for any later receive
            self._queue.put_nowait(_CLOSED)
            return None
        return item

    def close(self):
        """Close the channel, dropping any snapshot the view has not read.

        Only the engine thread calls this, so once the slot is drained the
        close marker always fits.
        """
        if self.closed:
            return
        self.closed = True
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
        self._queue.put_nowait(_CLOSED)
        logger.debug("Closed %s", self.name)

    def __iter__(self) -> Iterator[LevelSnapshot]:
        while True:
            snapshot = self.receive()
            if snapshot is None:
                return
            yield snapshot
