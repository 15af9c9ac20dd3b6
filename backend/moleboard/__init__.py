from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
import click
from config import Config

db = SQLAlchemy()


def _cors_origins(value):
    if not value or value == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config, clock=None, rate_limit_store=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    # Any origin may call the API; no cookies or auth headers are involved
    origins = _cors_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=origins, send_wildcard=(origins == '*'))

    from moleboard.services.scores import ScoreError, ScoreService
    from moleboard.services.scores.clock import SystemClock
    from moleboard.services.scores.rate_limit import InMemoryRateLimitStore

    flask_app.extensions['scores'] = ScoreService(
        clock=clock or SystemClock(),
        rate_limits=rate_limit_store or InMemoryRateLimitStore(),
    )

    from moleboard.api.scores import scores
    flask_app.register_blueprint(scores)

    # Schema is created on startup if absent; there are no migrations
    from moleboard import models  # noqa: F401
    with flask_app.app_context():
        db.create_all()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the scores table."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    @click.command('leaderboard')
    @click.option('--date', 'day', default=None, help='Day to rank (YYYY-MM-DD), defaults to today.')
    def leaderboard_command(day):
        """Prints the ranked top scores for a day."""
        service = flask_app.extensions['scores']
        with flask_app.app_context():
            try:
                entries = service.leaderboard(day)
            except ScoreError as exc:
                click.echo(exc.message, err=True)
                raise SystemExit(1)
        if not entries:
            click.echo('No scores yet.')
            return
        for rank, entry in enumerate(entries, start=1):
            click.echo(f"{rank:>2}. {entry['username']} {entry['score']}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(leaderboard_command)

    return flask_app
