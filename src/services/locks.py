"""One lock per game: mutations of the same game are applied one at a time, different games do not wait on each other."""

from contextlib import contextmanager
from threading import Lock
from typing import Generator
from uuid import UUID


class GameLocks:
    def __init__(self) -> None:
        self._locks: dict[UUID, Lock] = {}
        self._registry_lock = Lock()

    def _lock_for(self, game_id: UUID) -> Lock:
        with self._registry_lock:
            if game_id not in self._locks:
                self._locks[game_id] = Lock()
            return self._locks[game_id]

    @contextmanager
    def hold(self, game_id: UUID) -> Generator[None, None, None]:
        """Serialize the read-modify-write of a single game."""
        lock = self._lock_for(game_id)
        with lock:
            yield

    def __contains__(self, game_id: object) -> bool:
        with self._registry_lock:
            return game_id in self._locks

    def discard(self, game_id: UUID) -> None:
        """Forget the lock of a game that will not change anymore (deleted, completed or cancelled)."""
        with self._registry_lock:
            self._locks.pop(game_id, None)
