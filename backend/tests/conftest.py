import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app
from scoreboard.services.leaderboard import LeaderboardStore


class FakeClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        moment = self.now
        self.now = self.now + timedelta(seconds=1)
        return moment


@pytest.fixture()
def leaderboard_path(tmp_path):
    return str(tmp_path / 'leaderboard.json')


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(leaderboard_path, clock):
    return LeaderboardStore(leaderboard_path, clock=clock)


@pytest.fixture()
def test_config(leaderboard_path, clock):
    class TestConfig:
        TESTING = True
        LOG_LEVEL = 'DEBUG'
        LEADERBOARD_FILE = leaderboard_path
        LEADERBOARD_SIZE = 10
        NAME_MAX_LENGTH = 15
        SCORE_MAX = 999999
        CORS_ORIGINS = '*'
        LEADERBOARD_CLOCK = clock

    return TestConfig


@pytest.fixture()
def flask_app(test_config):
    application = create_app(test_config)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
