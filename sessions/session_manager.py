"""
Session Manager - Find-or-create sessions and the session cookie protocol
"""
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

import config
from sessions.id_generator import IdGenerator, get_id_generator
from sessions.session import Session
from sessions.session_store import SessionStore
from utils.helpers import mask_session_id

logger = logging.getLogger(__name__)


class SameSite(str, Enum):
    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"


class ManagerConfig(BaseModel):
    """Cookie settings, fixed once the manager is built"""
    model_config = ConfigDict(frozen=True)

    cookie_name: str = Field(default="session_id", min_length=1)
    secure: bool = False
    http_only: bool = True
    same_site: SameSite = SameSite.LAX

    @field_validator("same_site", mode="before")
    @classmethod
    def _normalize_same_site(cls, value):
        # Accept "lax", "STRICT", etc. from environment variables
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @classmethod
    def from_env(cls) -> "ManagerConfig":
        """Build the configuration from config.py settings"""
        return cls(
            cookie_name=config.SESSION_COOKIE_NAME,
            secure=config.COOKIE_SECURE,
            http_only=config.COOKIE_HTTP_ONLY,
            same_site=config.COOKIE_SAME_SITE
        )


class SessionManager:
    """
    Request-facing entry point: resolves the session for a request and
    builds/parses the cookie carrying its ID.

    Handlers must call ``save`` themselves; nothing is saved automatically
    when a request finishes.
    """

    def __init__(
        self,
        store: SessionStore,
        config: Optional[ManagerConfig] = None,
        generator: Optional[IdGenerator] = None
    ):
        self.store = store
        self.config = config or ManagerConfig()
        self._generator = generator or get_id_generator()

    def get_or_create(self, session_id: Optional[str]) -> Session:
        """
        Get the existing session or create a new one.

        Args:
            session_id: Session ID from the cookie; empty or None starts
                a new session

        Returns:
            Loaded session (is_new False) or a new session that already
            has a record in the store (is_new True)
        """
        if session_id:
            session = self.store.load(session_id)
            if session is not None:
                return session
            logger.debug("[SESSION] No live session for %s", mask_session_id(session_id))

        session = Session.create(self._generator)
        self.store.save(session)
        logger.debug("[SESSION] Created session %s", mask_session_id(session.id))
        return session

    def save(self, session: Session) -> None:
        """Persist a session and renew its expiry"""
        self.store.save(session)

    def destroy(self, session_id: str) -> None:
        """Delete a session; deleting an unknown ID is not an error"""
        self.store.delete(session_id)

    def rotate(self, session: Session) -> str:
        """
        Move a session to a new ID (session-fixation defence after login).

        The session is saved under its new ID as a new record (with a new
        creation time) and the record under the old ID is deleted.

        Args:
            session: Session to rotate

        Returns:
            The previous session ID
        """
        old_id = session.regenerate_id(self._generator)
        self.store.save(session)
        self.store.delete(old_id)
        logger.info(
            "[SESSION] Rotated session %s -> %s",
            mask_session_id(old_id), mask_session_id(session.id)
        )
        return old_id

    def cleanup(self) -> int:
        """
        Remove expired sessions from the store.

        Returns:
            Number of sessions removed
        """
        return self.store.cleanup()

    def _cookie_attributes(self) -> List[str]:
        attributes = []
        if self.config.http_only:
            attributes.append("HttpOnly")
        if self.config.secure:
            attributes.append("Secure")
        attributes.append(f"SameSite={self.config.same_site.value}")
        attributes.append("Path=/")
        return attributes

    def set_cookie_header(self, session: Session) -> str:
        """
        Build the Set-Cookie header value for a session.

        Format: "{name}={id}[; HttpOnly][; Secure]; SameSite={value}; Path=/"

        Args:
            session: Session whose ID is sent to the client

        Returns:
            Header value
        """
        segments = [f"{self.config.cookie_name}={session.id}"]
        segments.extend(self._cookie_attributes())
        return "; ".join(segments)

    def expired_cookie_header(self) -> str:
        """
        Build a Set-Cookie header value that clears the session cookie.

        Returns:
            Header value with an empty ID and Max-Age=0
        """
        segments = [f"{self.config.cookie_name}="]
        segments.extend(self._cookie_attributes())
        segments.append("Max-Age=0")
        return "; ".join(segments)

    def parse_cookie(self, header: Optional[str]) -> str:
        """
        Extract the session ID from a Cookie header.

        Matches the first "{name}=" anywhere in the header, so a cookie
        whose name ends with the configured name (e.g. "xsession_id=")
        also matches.

        Args:
            header: Raw Cookie header text

        Returns:
            Session ID, or "" if the cookie is not present
        """
        if not header:
            return ""

        token = f"{self.config.cookie_name}="
        start = header.find(token)
        if start == -1:
            return ""

        start += len(token)
        end = len(header)
        for delimiter in (";", " "):
            position = header.find(delimiter, start)
            if position != -1:
                end = min(end, position)
        return header[start:end]


# Global singleton
_session_manager = None


def get_session_manager() -> SessionManager:
    """Get global session manager instance"""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager(
            SessionStore(ttl=config.SESSION_TTL_SECONDS),
            ManagerConfig.from_env()
        )
    return _session_manager
