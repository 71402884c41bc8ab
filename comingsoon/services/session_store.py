"""In-memory admin sessions.

Tokens live only as long as the process. Expiry is checked lazily when a
token is presented; ``purge_expired`` sweeps the rest and is run on every
login so the map cannot grow without bound.
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

from comingsoon.core.errors import SessionExpired, Unauthorized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminSession:
    user: dict
    expires_at: float


class SessionStore:
    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self._clock = clock
        self._sessions: dict[str, AdminSession] = {}
        # Sync handlers run in a thread pool.
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions

    def create(self, user: dict) -> str:
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        expires_at = self._clock() + self.ttl.total_seconds()
        with self._lock:
            self._sessions[token] = AdminSession(user=dict(user), expires_at=expires_at)
        logger.info("Admin session created for %s", user.get("username"))
        return token

    def validate(self, token: str | None) -> dict:
        if not token:
            raise Unauthorized()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise Unauthorized()
            if self._clock() >= session.expires_at:
                del self._sessions[token]
                raise SessionExpired()
        return dict(session.user)

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if now >= s.expires_at]
            for t in expired:
                del self._sessions[t]
        if expired:
            logger.debug("Purged %d expired admin sessions", len(expired))
        return len(expired)
