"""
Unit tests for session sweeper
"""
import pytest
import threading
import time
from sessions.session import Session
from sessions.session_store import SessionStore
from sessions.sweeper import SessionSweeper


class TestSessionSweeper:
    """Tests for SessionSweeper"""

    def test_invalid_interval(self, store):
        """Test that a non-positive interval is rejected"""
        with pytest.raises(ValueError):
            SessionSweeper(store, interval=0)

    def test_run_once(self, store, clock):
        """Test a single sweep"""
        for _ in range(3):
            store.save(Session.create())

        clock.now = 1500

        sweeper = SessionSweeper(store, interval=60)
        assert sweeper.run_once() == 3
        assert store.count() == 0

    def test_background_sweep(self, store, clock):
        """Test that the background thread removes expired records"""
        store.save(Session.create())
        clock.now = 1500

        sweeper = SessionSweeper(store, interval=0.01)
        sweeper.start()
        try:
            deadline = time.time() + 5
            while store.count() and time.time() < deadline:
                time.sleep(0.01)
        finally:
            sweeper.stop(timeout=1)

        assert store.count() == 0
        assert sweeper.is_running is False

    def test_start_is_idempotent(self, store):
        """Test that starting twice keeps a single thread"""
        sweeper = SessionSweeper(store, interval=10)
        sweeper.start()
        thread = sweeper._thread
        sweeper.start()

        assert sweeper._thread is thread
        sweeper.stop(timeout=1)
        assert sweeper.is_running is False

    def test_sweep_errors_do_not_stop_loop(self, clock):
        """Test that a failing sweep is logged and retried"""
        calls = []

        class FlakyStore(SessionStore):
            def cleanup(self):
                calls.append(1)
                if len(calls) == 1:
                    raise RuntimeError("boom")
                return super().cleanup()

        store = FlakyStore(ttl=1000, clock=clock)
        sweeper = SessionSweeper(store, interval=0.01)
        sweeper.start()
        try:
            deadline = time.time() + 5
            while len(calls) < 3 and time.time() < deadline:
                time.sleep(0.01)
        finally:
            sweeper.stop(timeout=1)

        assert len(calls) >= 3

    def test_restart_during_slow_sweep(self, clock):
        """Test that restarting mid-sweep keeps a single sweep thread"""
        entered = threading.Event()
        release = threading.Event()
        calls = []

        class SlowStore(SessionStore):
            def cleanup(self):
                calls.append(1)
                entered.set()
                release.wait(5)
                return super().cleanup()

        sweeper = SessionSweeper(SlowStore(ttl=1000, clock=clock), interval=0.01)
        sweeper.start()
        try:
            assert entered.wait(5)

            sweeper.stop(timeout=0.01)
            assert sweeper.is_running is True

            sweeper.start()
            alive = [t for t in threading.enumerate() if t.name == "session-sweeper"]
            assert len(alive) == 1

            # The resumed thread keeps sweeping once the slow sweep ends
            release.set()
            deadline = time.time() + 5
            while len(calls) < 3 and time.time() < deadline:
                time.sleep(0.01)
            assert len(calls) >= 3
            assert sweeper.is_running is True
        finally:
            release.set()
            sweeper.stop(timeout=1)

        assert sweeper.is_running is False
