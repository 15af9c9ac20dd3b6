import math
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from moleboard import db
from moleboard.models import Score
from .clock import Clock, day_for
from .errors import InvalidPayload, InvalidScore, StorageError, TooFast
from .rate_limit import RateLimitStore

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_DIALECTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def normalize_fid(raw: Any) -> str:
    """Opaque id: a non-empty string or a non-zero integer, kept verbatim."""
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        raise InvalidPayload('fid is required')
    if raw == 0 or (isinstance(raw, str) and not raw.strip()):
        raise InvalidPayload('fid is required')
    return str(raw)


def normalize_score(raw: Any) -> int:
    """Accept JSON integers and integer-valued floats (50.0), nothing else."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidPayload('score must be a number')
    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            raise InvalidPayload('score must be a whole number')
        return int(raw)
    return raw


def normalize_username(raw: Any, default: str, max_length: int) -> str:
    if not isinstance(raw, str) or not raw.strip():
        return default
    return raw.strip()[:max_length]


class ScoreService:
    """Validates submissions and keeps each fid's best score per UTC day.

    The clock and the rate-limit store are injected so tests can move time
    forward and a multi-instance deployment can share cooldowns.
    """

    def __init__(self, clock: Clock, rate_limits: RateLimitStore):
        self.clock = clock
        self.rate_limits = rate_limits

    def submit(self, fid: Any, username: Any, score: Any, now_ms: Optional[int] = None) -> None:
        """Validate and store a score.

        Checks run in order (fid, score type, score range, cooldown) and the
        first failure is raised. The cooldown is consumed by every attempt that
        gets past validation, whether or not it improves the stored score.
        """
        cfg = current_app.config
        fid = normalize_fid(fid)
        value = normalize_score(score)
        min_score = int(cfg.get('MIN_SCORE', 0))
        max_score = int(cfg.get('MAX_SCORE', 300))
        if value < min_score or value > max_score:
            raise InvalidScore(f'score must be between {min_score} and {max_score}')

        if now_ms is None:
            now_ms = self.clock.now_ms()
        cooldown_ms = int(cfg.get('SUBMIT_COOLDOWN_MS', 10000))
        if not self.rate_limits.try_acquire(fid, now_ms, cooldown_ms):
            current_app.logger.info(f"[too-fast] fid={fid}")
            raise TooFast()

        day = day_for(now_ms)
        name = normalize_username(
            username,
            cfg.get('DEFAULT_USERNAME', 'anon'),
            int(cfg.get('MAX_USERNAME_LENGTH', 64)),
        )
        try:
            self._upsert_best(fid, name, value, day, now_ms)
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception(f"[db-error] submit fid={fid} day={day}")
            raise StorageError(str(exc)) from exc
        current_app.logger.info(f"[submit] fid={fid} score={value} day={day}")

    def leaderboard(self, day: Optional[str] = None) -> List[Dict[str, Any]]:
        """Top scores for a day, best first.

        Equal scores rank by who reached them first, then by row id. The day
        is not validated; a malformed one simply matches nothing.
        """
        if not day:
            day = day_for(self.clock.now_ms())
        limit = int(current_app.config.get('LEADERBOARD_LIMIT', 10))
        try:
            rows = (
                Score.query.filter_by(date=day)
                .order_by(Score.score.desc(), Score.created_at.asc(), Score.id.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception(f"[db-error] leaderboard day={day}")
            raise StorageError(str(exc)) from exc
        return [row.to_dict() for row in rows]

    def _upsert_best(self, fid: str, username: str, score: int, day: str, now_ms: int) -> None:
        insert = _UPSERT_DIALECTS.get(db.engine.dialect.name)
        if insert is None:
            self._locked_read_then_write(fid, username, score, day, now_ms)
            return
        # One statement: insert the row, or raise score/created_at only when higher.
        # The display name of an existing row is never touched.
        stmt = insert(Score).values(
            fid=fid,
            username=username,
            score=score,
            date=day,
            created_at=now_ms,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['fid', 'date'],
            set_={'score': stmt.excluded.score, 'created_at': stmt.excluded.created_at},
            where=Score.score < stmt.excluded.score,
        )
        db.session.execute(stmt)
        db.session.commit()

    def _locked_read_then_write(self, fid: str, username: str, score: int, day: str, now_ms: int) -> None:
        row = (
            Score.query.filter_by(fid=fid, date=day)
            .with_for_update()
            .first()
        )
        if row is None:
            db.session.add(Score(fid=fid, username=username, score=score, date=day, created_at=now_ms))
        elif score > row.score:
            row.score = score
            row.created_at = now_ms
            db.session.add(row)
        db.session.commit()
