from __future__ import annotations

import logging
import secrets
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from .session import GameSession

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """No live session with the given id."""


# PUBLIC_INTERFACE
class SessionRegistry:
    """In-memory store of live game sessions.

    Sessions are never persisted. Discarding a session closes it, which stops
    its clock and detaches hint listeners, so nothing keeps mutating a session
    that has been replaced. When more than max_sessions are live the oldest is
    evicted the same way.
    """

    def __init__(self, max_sessions: int = 1000, id_factory: Callable[[], str] = lambda: secrets.token_hex(8)):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._id_factory = id_factory
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    # PUBLIC_INTERFACE
    def add(self, session: GameSession, replaces: Optional[str] = None) -> str:
        """Register session and return its id, discarding replaces first if given."""
        if replaces:
            self.discard(replaces)
        evicted = []
        with self._lock:
            session_id = self._id_factory()
            while session_id in self._sessions:
                session_id = self._id_factory()
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted.append(self._sessions.popitem(last=False))
        for old_id, old in evicted:
            with old.lock:
                old.close()
            logger.info("Evicted session %s", old_id)
        logger.info("Started %s session %s", session.mode, session_id)
        return session_id

    # PUBLIC_INTERFACE
    def get(self, session_id: str) -> GameSession:
        """Return the live session.

        Raises:
            SessionNotFound: if the id is unknown or was discarded.
        """
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFound(session_id) from None

    # PUBLIC_INTERFACE
    @contextmanager
    def locked(self, session_id: str) -> Iterator[GameSession]:
        """Yield the live session while holding its lock.

        Commands and snapshots on one session run one at a time even when
        requests arrive on several threads.

        Raises:
            SessionNotFound: if the id is unknown or was discarded.
        """
        session = self.get(session_id)
        with session.lock:
            if session.closed:
                raise SessionNotFound(session_id)
            yield session

    # PUBLIC_INTERFACE
    def discard(self, session_id: str) -> bool:
        """Close and forget a session. Returns False if it was not live."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        with session.lock:
            session.close()
        logger.info("Discarded session %s", session_id)
        return True

    def clear(self) -> None:
        with self._lock:
            sessions: Dict[str, GameSession] = dict(self._sessions)
            self._sessions.clear()
        for session in sessions.values():
            with session.lock:
                session.close()
