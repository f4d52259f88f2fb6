"""
SKYQUEUE Nightly Queue

Ordered selection of up to six available targets for one night. Mutations
that break a queue rule are refused silently: the call returns False and
the queue is left exactly as it was.
"""

from typing import List, Optional

from skyqueue.constants import MAX_QUEUE_SIZE
from skyqueue.logging_config import get_logger
from services.catalog.catalog import CatalogStore, Observation

logger = get_logger(__name__)

__all__ = ["QueueManager"]


class QueueManager:
    """
    Enforces capacity and membership rules for the nightly queue.

    Rules:
    - at most max_size entries, no duplicate ids
    - every entry is available in the catalog when it is added
    - no add/remove once the queue is locked for a running night
    """

    def __init__(self, catalog: CatalogStore, max_size: int = MAX_QUEUE_SIZE):
        self._catalog = catalog
        self.max_size = max_size
        self._entries: List[Observation] = []
        self._locked = False

    @property
    def entries(self) -> List[Observation]:
        """Copy of the queue in execution order."""
        return list(self._entries)

    @property
    def ids(self) -> List[int]:
        return [obs.obs_id for obs in self._entries]

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.max_size

    @property
    def total_base_points(self) -> int:
        return sum(obs.base_points for obs in self._entries)

    @property
    def total_duration_minutes(self) -> float:
        return sum(obs.duration_minutes for obs in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, obs_id: object) -> bool:
        return any(obs.obs_id == obs_id for obs in self._entries)

    def add(self, obs_id: int) -> bool:
        """Append an available target. Returns False when refused."""
        reason = self._add_refusal(obs_id)
        if reason:
            logger.debug(f"Refused to queue {obs_id}: {reason}")
            return False

        self._entries.append(self._catalog.get(obs_id))
        logger.debug(f"Queued {obs_id} ({len(self._entries)}/{self.max_size})")
        return True

    def remove(self, obs_id: int) -> bool:
        """Drop a target by id. Returns False when locked or absent."""
        if self._locked or obs_id not in self:
            return False
        self._entries = [obs for obs in self._entries if obs.obs_id != obs_id]
        logger.debug(f"Unqueued {obs_id}")
        return True

    def lock(self) -> bool:
        """Freeze the queue for a night run. Refused when empty."""
        if not self._entries:
            return False
        self._locked = True
        return True

    def clear(self) -> None:
        """Empty and unlock the queue."""
        self._entries = []
        self._locked = False

    def _add_refusal(self, obs_id: int) -> Optional[str]:
        if self._locked:
            return "queue is locked"
        if obs_id not in self._catalog:
            return "not available in catalog"
        if obs_id in self:
            return "already queued"
        if self.is_full:
            return "queue is full"
        return None
