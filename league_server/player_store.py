import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    name: str
    wins: int = 0

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'wins': self.wins,
        }


class StoreError(Exception):
    def __init__(self, backend: str, operation: str, reason: str = None):
        self.backend = backend
        self.operation = operation
        self.reason = reason or f"{backend} store failed during {operation}"
        super().__init__(self.reason)


def rank_players(players: Iterable[Player]) -> List[Player]:
    """Order a league by wins (highest first), then by name."""
    return sorted(players, key=lambda p: (-p.wins, p.name))


class PlayerStore(ABC):
    """
    Stores score information about players.

    A name that never recorded a win scores 0, which is indistinguishable
    from a known player with zero wins.
    """

    backend = 'abstract'

    @abstractmethod
    def get_player_score(self, name: str) -> int:
        """Return the current win count for name (0 when unknown)."""

    @abstractmethod
    def record_win(self, name: str) -> None:
        """Add one win for name, creating the entry if absent."""

    @abstractmethod
    def get_league(self) -> List[Player]:
        """Return a snapshot of every known player and their wins."""

    def ping(self) -> bool:
        return True


class InMemoryPlayerStore(PlayerStore):
    """
    Process-local store backed by a dict.
    All reads and read-modify-writes hold the same lock, so concurrent
    record_win calls never lose an increment.
    """

    backend = 'memory'

    def __init__(self, initial: Dict[str, int] = None):
        self._lock = threading.Lock()
        self._wins: Dict[str, int] = dict(initial or {})

    def get_player_score(self, name: str) -> int:
        with self._lock:
            return self._wins.get(name, 0)

    def record_win(self, name: str) -> None:
        with self._lock:
            self._wins[name] = self._wins.get(name, 0) + 1
            wins = self._wins[name]
        logger.debug(f"Recorded win for {name!r}: {wins}")

    def get_league(self) -> List[Player]:
        with self._lock:
            snapshot = [Player(name, wins) for name, wins in self._wins.items()]
        return rank_players(snapshot)
