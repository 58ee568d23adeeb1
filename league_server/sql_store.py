import logging
from datetime import datetime
from typing import List

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .player_store import Player, PlayerStore, StoreError, rank_players

logger = logging.getLogger(__name__)

db = SQLAlchemy()


class PlayerScore(db.Model):
    __tablename__ = 'player_scores'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    wins = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_player(self) -> Player:
        return Player(name=self.name, wins=self.wins or 0)


class SqlPlayerStore(PlayerStore):
    """
    Persistent store on top of Flask-SQLAlchemy.

    Increments are done in the database (wins = wins + 1) so that two
    concurrent requests never overwrite each other's count. Must be used
    inside an application context.
    """

    backend = 'sql'

    def __init__(self, max_retries: int = 3):
        self.max_retries = max_retries

    def get_player_score(self, name: str) -> int:
        try:
            row = PlayerScore.query.filter_by(name=name).first()
        except SQLAlchemyError as e:
            self._fail('get_player_score', e)
        return row.wins if row else 0

    def record_win(self, name: str) -> None:
        for attempt in range(self.max_retries):
            try:
                if self._increment(name):
                    return
                db.session.add(PlayerScore(name=name, wins=1))
                db.session.commit()
                logger.debug(f"Created score row for {name!r}")
                return
            except IntegrityError:
                # Another request inserted the row first; retry as an update
                db.session.rollback()
                logger.debug(f"Insert race for {name!r}, retry {attempt + 1}")
            except SQLAlchemyError as e:
                db.session.rollback()
                self._fail('record_win', e)

        raise StoreError(self.backend, 'record_win', f"Gave up recording win for {name!r}")

    def get_league(self) -> List[Player]:
        try:
            rows = PlayerScore.query.all()
        except SQLAlchemyError as e:
            self._fail('get_league', e)
        return rank_players(row.to_player() for row in rows)

    def ping(self) -> bool:
        try:
            db.session.execute(db.text('SELECT 1'))
            return True
        except SQLAlchemyError:
            return False

    def _increment(self, name: str) -> bool:
        updated = PlayerScore.query.filter_by(name=name).update(
            {
                PlayerScore.wins: PlayerScore.wins + 1,
                PlayerScore.updated_at: datetime.utcnow(),
            },
            synchronize_session=False
        )
        db.session.commit()
        return updated > 0

    def _fail(self, operation: str, error: Exception):
        logger.error(f"SQL store {operation} failed: {error}")
        raise StoreError(self.backend, operation, str(error)) from error
