"""
Pytest configuration and fixtures for league server tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from league_server.app import create_app
from league_server.player_store import PlayerStore, Player, InMemoryPlayerStore


class StubPlayerStore(PlayerStore):
    """Canned scores plus a log of every call the routes make."""
    
    backend = 'stub'
    
    def __init__(self, scores=None, league=None):
        self.scores = dict(scores or {})
        self.league = list(league or [])
        self.win_calls = []
        self.score_calls = []
        self.league_calls = 0
    
    def get_player_score(self, name):
        self.score_calls.append(name)
        return self.scores.get(name, 0)
    
    def record_win(self, name):
        self.win_calls.append(name)
    
    def get_league(self):
        self.league_calls += 1
        return self.league


@pytest.fixture
def stub_store():
    """Stub store with two known players."""
    return StubPlayerStore(
        scores={'Pepper': 20, 'Floyd': 10},
        league=[Player('Cleo', 32), Player('Chris', 20), Player('Tiest', 14)]
    )


@pytest.fixture
def stub_app(stub_store):
    """Application dispatching to the stub store."""
    return create_app('testing', store=stub_store)


@pytest.fixture
def stub_client(stub_app):
    return stub_app.test_client()


@pytest.fixture
def store():
    """Fresh in-memory store."""
    return InMemoryPlayerStore()


@pytest.fixture
def app(store):
    """Create application for testing."""
    return create_app('testing', store=store)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
