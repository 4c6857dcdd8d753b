import time
import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from ..config import settings
from ..state.models import PortalSession


class PortalSessionRepository(ABC):
    """
    Defines how the portal accesses visitor sessions.
    """

    @abstractmethod
    def create(self) -> PortalSession:
        """Creates a new session on the first screen with a unique ID."""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[PortalSession]:
        """Retrieves a session by ID."""
        pass

    @abstractmethod
    def save(self, session: PortalSession):
        """Stores the session state."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass


class InMemoryPortalSessionRepository(PortalSessionRepository):
    """
    Keeps sessions in a process-local dictionary, ordered by last use.

    Every page view without a cookie creates a session, and sessions hold
    uploaded invoice bytes, so the store is bounded two ways:
    - a session idle for longer than `ttl_seconds` is dropped;
    - when `max_sessions` is exceeded the least recently used one is dropped.
    """

    def __init__(
        self,
        ttl_seconds: float = settings.SESSION_TTL_SECONDS,
        max_sessions: int = settings.SESSION_MAX_COUNT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        # session_id -> (last used, session); oldest first
        self._store: "OrderedDict[str, Tuple[float, PortalSession]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def create(self) -> PortalSession:
        self._evict_expired()
        new_id = str(uuid.uuid4())
        session = PortalSession(session_id=new_id)
        self._touch(session)
        while len(self._store) > self.max_sessions:
            self._store.popitem(last=False)
        return session

    def get(self, session_id: str) -> Optional[PortalSession]:
        self._evict_expired()
        entry = self._store.get(session_id)
        if entry is None:
            return None
        session = entry[1]
        self._touch(session)
        return session

    def save(self, session: PortalSession):
        self._touch(session)

    def delete(self, session_id: str) -> bool:
        return self._store.pop(session_id, None) is not None

    def _touch(self, session: PortalSession):
        self._store[session.session_id] = (self._clock(), session)
        self._store.move_to_end(session.session_id)

    def _evict_expired(self):
        cutoff = self._clock() - self.ttl_seconds
        while self._store:
            oldest_id, (last_used, _) = next(iter(self._store.items()))
            if last_used > cutoff:
                break
            del self._store[oldest_id]
