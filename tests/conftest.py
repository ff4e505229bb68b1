"""
Pytest configuration and fixtures
"""
import pytest
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sessions.id_generator import IdGenerator
from sessions.session_manager import ManagerConfig, SessionManager
from sessions.session_store import SessionStore


class FakeClock:
    """Manually advanced clock for deterministic expiry tests"""

    def __init__(self, start: float = 0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, amount: float):
        self.now += amount


@pytest.fixture
def clock():
    """Clock starting at 0"""
    return FakeClock()


@pytest.fixture
def store(clock):
    """Store with TTL of 1000 time units on the fake clock"""
    return SessionStore(ttl=1000, clock=clock)


@pytest.fixture
def generator():
    """Identifier generator backed by the OS random source"""
    return IdGenerator()


@pytest.fixture
def manager_config():
    """Cookie settings with every flag enabled"""
    return ManagerConfig(
        cookie_name="session_id",
        secure=True,
        http_only=True,
        same_site="Strict"
    )


@pytest.fixture
def manager(store, manager_config, generator):
    """Session manager over the fake-clock store"""
    return SessionManager(store, manager_config, generator)
