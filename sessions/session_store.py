"""
Session Store - Owns session records and enforces TTL-based expiry
"""
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import config
from sessions.session import Session
from utils.helpers import format_seconds, mask_session_id, monotonic_clock

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class SessionRecord:
    """Stored snapshot of a session's data plus its absolute expiry"""
    data: Dict[str, str]
    created_at: float
    expires_at: float

    @classmethod
    def from_session(
        cls,
        session: Session,
        now: float,
        ttl: float,
        created_at: Optional[float] = None
    ) -> "SessionRecord":
        """
        Snapshot a session into a new record.

        Args:
            session: Session to copy
            now: Current store time (the save time)
            ttl: Time-to-live added to now
            created_at: Creation time of the live record being replaced
                (defaults to now, starting a new record)

        Returns:
            SessionRecord holding its own copy of the data
        """
        if created_at is None:
            created_at = now
        return cls(
            data=dict(session.data),
            created_at=created_at,
            expires_at=now + ttl
        )

    def to_session(self, session_id: str, now: float) -> Session:
        """
        Rehydrate a detached session from this record.

        Args:
            session_id: Identifier the record is stored under
            now: Current store time (recorded as last access)

        Returns:
            Session with is_new unset and its own copy of the data
        """
        return Session(
            id=session_id,
            data=dict(self.data),
            is_new=False,
            is_modified=False,
            created_at=self.created_at,
            last_accessed=now,
            expires_at=self.expires_at
        )

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now


class SessionStore:
    """
    Thread-safe in-memory store of session records.

    A single lock guards the whole record collection. Expired records are
    invisible to ``load`` and ``exists`` even before ``cleanup`` removes
    them. Only ``save`` renews a record's expiry; reads never do.
    """

    def __init__(self, ttl: float = None, clock: Optional[Clock] = None):
        if ttl is None:
            ttl = config.SESSION_TTL_SECONDS
        if ttl <= 0:
            raise ValueError("Session TTL must be greater than 0")

        self._ttl = ttl
        self._clock = clock or monotonic_clock
        self._records: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def now(self) -> float:
        """Current time according to the store's clock"""
        return self._clock()

    def save(self, session: Session) -> None:
        """
        Insert or replace the record for a session and renew its expiry.

        Args:
            session: Session to persist; its timestamps are updated and
                it is marked as no longer modified
        """
        with self._lock:
            now = self._clock()
            existing = self._records.get(session.id)
            created_at = None
            if existing is not None and not existing.is_expired(now):
                created_at = existing.created_at

            record = SessionRecord.from_session(session, now, self._ttl, created_at)
            self._records[session.id] = record

        session.created_at = record.created_at
        session.expires_at = record.expires_at
        session.is_modified = False

        logger.debug(
            "[STORE] Saved session %s (%d keys, ttl %s)",
            mask_session_id(session.id), len(record.data), format_seconds(self._ttl)
        )

    def load(self, session_id: str) -> Optional[Session]:
        """
        Load a detached copy of a live session.

        Args:
            session_id: Session identifier

        Returns:
            Session or None if not found or expired
        """
        with self._lock:
            now = self._clock()
            record = self._records.get(session_id)
            if record is None or record.is_expired(now):
                return None
            return record.to_session(session_id, now)

    def delete(self, session_id: str) -> bool:
        """
        Delete a session record.

        Args:
            session_id: Session identifier

        Returns:
            True if a record was deleted, False if not found
        """
        with self._lock:
            if session_id in self._records:
                del self._records[session_id]
                logger.debug("[STORE] Deleted session %s", mask_session_id(session_id))
                return True
            return False

    def exists(self, session_id: str) -> bool:
        """
        Check if a live (unexpired) session exists.

        Args:
            session_id: Session identifier

        Returns:
            True if the session exists and has not expired
        """
        with self._lock:
            record = self._records.get(session_id)
            return record is not None and not record.is_expired(self._clock())

    def cleanup(self) -> int:
        """
        Remove all expired records.

        Returns:
            Number of records removed
        """
        with self._lock:
            now = self._clock()
            expired = [
                session_id for session_id, record in self._records.items()
                if record.is_expired(now)
            ]

            for session_id in expired:
                del self._records[session_id]

        if expired:
            logger.info("[STORE] Cleaned up %d expired sessions", len(expired))
        return len(expired)

    def count(self) -> int:
        """
        Count stored records, including expired ones not yet cleaned up.

        Returns:
            Number of records
        """
        with self._lock:
            return len(self._records)
