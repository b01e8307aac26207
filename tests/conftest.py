"""
Pytest configuration and fixtures for arena API tests.
"""
import os
import sys

import mongomock
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from arena.app import create_app
from arena.models import Player, Team
from arena.seed import seed_database


@pytest.fixture
def mongo_client():
    """Fresh in-memory entity store per test."""
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    """Create application for testing."""
    return create_app('testing', mongo_client=mongo_client)


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def store(app):
    return app.store


@pytest.fixture
def reports(app):
    return app.reports


@pytest.fixture
def sample_teams(store):
    """Three teams with distinct counters."""
    teams = [
        Team(team_name='Sentinels', game_name='Valorant', region='NA', wins=5, total_score=15),
        Team(team_name='Fnatic', game_name='Valorant', region='EU', wins=3, total_score=9),
        Team(team_name='Paper Rex', game_name='Valorant', region='ASIA', wins=0, total_score=1),
    ]
    for team in teams:
        store.create_team(team)
    return teams


@pytest.fixture
def sample_player(store, sample_teams):
    player = Player(gamertag='TenZ', team_id=sample_teams[0].id, game_name='Valorant', kills=150)
    store.create_player(player)
    return player


@pytest.fixture
def seeded(store):
    """The demo league from the seed script; returns inserted ids per collection."""
    return seed_database(store)
