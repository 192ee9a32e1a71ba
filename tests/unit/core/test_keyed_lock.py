"""
Unit tests for KeyedLock.
"""
import threading
import time

from core.infrastructure.keyed_lock import KeyedLock


class TestKeyedLock:
    """Tests for KeyedLock."""

    def test_entries_released_after_use(self):
        locks = KeyedLock()
        with locks.hold("A"):
            assert list(locks._entries) == ["A"]
        assert locks._entries == {}

    def test_same_key_is_exclusive(self):
        locks = KeyedLock()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("A"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(True)
                time.sleep(0.01)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []
        assert locks._entries == {}

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        acquired = threading.Event()

        def other():
            with locks.hold("B"):
                acquired.set()

        with locks.hold("A"):
            thread = threading.Thread(target=other)
            thread.start()
            assert acquired.wait(timeout=1)
            thread.join()
