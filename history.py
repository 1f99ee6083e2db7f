import logging

logger = logging.getLogger(__name__)


class History:
    """
    Undo stack of full-buffer snapshots. Depth is unbounded and there is no redo.
    """
    def __init__(self):
        self._snapshots = []

    def __len__(self):
        return len(self._snapshots)

    @property
    def can_undo(self):
        return bool(self._snapshots)

    def push(self, canvas):
        """Stores a read-only copy of the canvas and returns it."""
        snapshot = canvas.read()
        snapshot.setflags(write=False)
        self._snapshots.append(snapshot)
        logger.debug("Pushed snapshot %d", len(self._snapshots))
        return snapshot

    def undo(self, canvas):
        """Restores the latest snapshot into ``canvas``; False when there is nothing to undo."""
        if not self._snapshots:
            return False
        canvas.write(self._snapshots.pop())
        return True

    def clear(self):
        self._snapshots.clear()
