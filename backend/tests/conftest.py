import os
import sys
import pytest

# Ensure the backend root (containing the `moleboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from moleboard import create_app, db
from moleboard.services.scores.rate_limit import InMemoryRateLimitStore

# 2026-03-14T12:00:00Z
NOON_MS = 1773489600 * 1000
DAY = '2026-03-14'


class TestConfig:
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MIN_SCORE = 0
    MAX_SCORE = 300
    SUBMIT_COOLDOWN_MS = 10000
    LEADERBOARD_LIMIT = 10
    DEFAULT_USERNAME = 'anon'
    MAX_USERNAME_LENGTH = 64
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'


class FakeClock:
    def __init__(self, now_ms=NOON_MS):
        self.now = now_ms

    def now_ms(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def rate_limits():
    return InMemoryRateLimitStore()


@pytest.fixture()
def flask_app(clock, rate_limits):
    application = create_app(TestConfig, clock=clock, rate_limit_store=rate_limits)
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def service(flask_app):
    return flask_app.extensions['scores']


@pytest.fixture()
def cli_runner(flask_app):
    return flask_app.test_cli_runner()
