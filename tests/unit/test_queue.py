"""
SKYQUEUE Nightly Queue Tests

Tests for capacity, membership and locking rules of QueueManager.
"""

import pytest

from services.catalog import CatalogStore, QueueManager
from tests.fixtures import make_catalog


@pytest.fixture
def catalog():
    return CatalogStore(make_catalog(10))


@pytest.fixture
def queue(catalog):
    return QueueManager(catalog)


class TestQueueAdd:
    """Tests for adding targets."""

    def test_add(self, queue):
        assert queue.add(3) is True
        assert queue.ids == [3]
        assert 3 in queue

    def test_add_is_idempotent(self, queue):
        """Adding the same id twice changes the queue only once."""
        assert queue.add(3) is True
        assert queue.add(3) is False
        assert queue.ids == [3]

    def test_capacity(self, queue):
        """A seventh add is refused and the queue stays at six."""
        for obs_id in range(1, 7):
            assert queue.add(obs_id) is True

        assert queue.is_full
        assert queue.add(7) is False
        assert len(queue) == 6
        assert queue.ids == [1, 2, 3, 4, 5, 6]

    def test_unknown_id_refused(self, queue):
        assert queue.add(99) is False
        assert len(queue) == 0

    def test_unavailable_id_refused(self, catalog, queue):
        catalog.remove([5])
        assert queue.add(5) is False

    def test_keeps_insertion_order(self, queue):
        for obs_id in (4, 1, 9):
            queue.add(obs_id)
        assert queue.ids == [4, 1, 9]

    def test_totals(self, queue):
        queue.add(1)
        queue.add(2)
        assert queue.total_base_points == 46
        assert queue.total_duration_minutes == 10


class TestQueueRemove:
    """Tests for removing targets."""

    def test_remove(self, queue):
        queue.add(1)
        queue.add(2)

        assert queue.remove(1) is True
        assert queue.ids == [2]

    def test_remove_absent(self, queue):
        assert queue.remove(1) is False


class TestQueueLock:
    """Tests for locking the queue for a running night."""

    def test_empty_queue_cannot_lock(self, queue):
        assert queue.lock() is False
        assert not queue.is_locked

    def test_locked_queue_is_immutable(self, queue):
        queue.add(1)
        assert queue.lock() is True

        assert queue.add(2) is False
        assert queue.remove(1) is False
        assert queue.ids == [1]

    def test_clear_unlocks(self, queue):
        queue.add(1)
        queue.lock()

        queue.clear()

        assert len(queue) == 0
        assert not queue.is_locked
        assert queue.add(2) is True

    def test_entries_is_a_copy(self, queue):
        queue.add(1)
        queue.entries.clear()
        assert queue.ids == [1]
