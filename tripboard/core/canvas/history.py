"""
Snapshot-based undo/redo over a raster surface.
"""

import logging
from typing import List, Optional, Tuple

from .surface import RasterSurface, Snapshot

logger = logging.getLogger(__name__)


class HistoryStack:
    """
    Linear history of buffer snapshots with a cursor.

    ``step`` always points at the snapshot that matches what the surface
    shows after the last commit/undo/redo. Committing while ``step`` is not
    at the end prunes the redo branch.
    """

    def __init__(self, surface: RasterSurface, max_size: int = 0):
        """
        Initialize history.

        Args:
            surface: Surface to snapshot and restore
            max_size: Oldest snapshots are dropped beyond this many (0 = unbounded)
        """
        self.surface = surface
        self.max_size = max_size
        # (pixels, scale factor they were taken at)
        self._snapshots: List[Tuple[Snapshot, float]] = []
        self.step = -1

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self.step > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self.step < len(self._snapshots) - 1

    def current(self) -> Optional[Snapshot]:
        if self.step < 0:
            return None
        return self._snapshots[self.step][0]

    def _restore_step(self):
        snapshot, scale = self._snapshots[self.step]
        self.surface.restore(snapshot, scale)

    def commit(self):
        """Snapshot the surface, prune the redo branch and append."""
        del self._snapshots[self.step + 1 :]
        self._snapshots.append((self.surface.snapshot(), self.surface.scale))

        if self.max_size and len(self._snapshots) > self.max_size:
            del self._snapshots[: len(self._snapshots) - self.max_size]

        self.step = len(self._snapshots) - 1
        logger.debug("History commit: step %d of %d", self.step, len(self))

    def undo(self) -> bool:
        """
        Step back one snapshot.

        Returns:
            True if the surface was restored, False at the oldest snapshot
        """
        if not self.can_undo:
            return False
        self.step -= 1
        self._restore_step()
        logger.debug("Undo: step %d of %d", self.step, len(self))
        return True

    def redo(self) -> bool:
        """
        Step forward one snapshot.

        Returns:
            True if the surface was restored, False at the newest snapshot
        """
        if not self.can_redo:
            return False
        self.step += 1
        self._restore_step()
        logger.debug("Redo: step %d of %d", self.step, len(self))
        return True
