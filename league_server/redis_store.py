import logging
from typing import List

import redis

from .player_store import Player, PlayerStore, StoreError, rank_players

logger = logging.getLogger(__name__)


class RedisPlayerStore(PlayerStore):
    """
    Store shared between processes, kept in a single Redis hash
    (name -> wins). HINCRBY is atomic on the server, so no client-side
    locking is needed.
    """

    backend = 'redis'

    def __init__(self, redis_client: redis.Redis, key_prefix: str = 'league'):
        self.redis = redis_client
        self.key = f"{key_prefix}:wins"

    @classmethod
    def from_url(cls, redis_url: str, key_prefix: str = 'league') -> "RedisPlayerStore":
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )
        return cls(client, key_prefix=key_prefix)

    def get_player_score(self, name: str) -> int:
        try:
            value = self.redis.hget(self.key, name)
        except redis.RedisError as e:
            self._fail('get_player_score', e)
        return int(value) if value is not None else 0

    def record_win(self, name: str) -> None:
        try:
            wins = self.redis.hincrby(self.key, name, 1)
        except redis.RedisError as e:
            self._fail('record_win', e)
        logger.debug(f"Recorded win for {name!r}: {wins}")

    def get_league(self) -> List[Player]:
        try:
            entries = self.redis.hgetall(self.key)
        except redis.RedisError as e:
            self._fail('get_league', e)
        return rank_players(Player(name, int(wins)) for name, wins in entries.items())

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.RedisError:
            return False

    def _fail(self, operation: str, error: Exception):
        logger.error(f"Redis store {operation} failed: {error}")
        raise StoreError(self.backend, operation, str(error)) from error
