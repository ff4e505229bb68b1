"""
Session Entity - Detached working copy of one session's state
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from sessions.id_generator import IdGenerator, get_id_generator


@dataclass
class Session:
    """
    In-memory key-value state for a single session.

    A Session is never shared with the store: changes only become visible
    to other requests once the session is passed to ``SessionStore.save``.
    Timestamps are in store-clock units and stay ``None`` until the store
    has seen the session.
    """
    id: str
    data: Dict[str, str] = field(default_factory=dict)
    is_new: bool = False
    is_modified: bool = False
    created_at: Optional[float] = None
    last_accessed: Optional[float] = None
    expires_at: Optional[float] = None

    @classmethod
    def create(cls, generator: Optional[IdGenerator] = None) -> "Session":
        """
        Create a brand-new session with a freshly generated ID.

        Args:
            generator: Identifier generator (defaults to the global one)

        Returns:
            Session with is_new set
        """
        generator = generator or get_id_generator()
        return cls(id=generator.generate(), is_new=True)

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a value, keeping the position of existing keys"""
        self.data[key] = value
        self.is_modified = True

    def get(self, key: str) -> Optional[str]:
        """
        Get a value.

        Args:
            key: Key to look up

        Returns:
            Value or None if the key is absent
        """
        return self.data.get(key)

    def get_or(self, key: str, default: str) -> str:
        """Get a value, falling back to default if the key is absent"""
        return self.data.get(key, default)

    def contains(self, key: str) -> bool:
        """Check if a key is present"""
        return key in self.data

    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: Key to remove

        Returns:
            True if the key was removed, False if it was absent
        """
        if key not in self.data:
            return False
        del self.data[key]
        self.is_modified = True
        return True

    def clear(self) -> None:
        """Remove all keys"""
        self.data.clear()
        self.is_modified = True

    def size(self) -> int:
        """Number of keys in the session"""
        return len(self.data)

    def __len__(self) -> int:
        """Number of keys in the session"""
        return len(self.data)

    def regenerate_id(self, generator: Optional[IdGenerator] = None) -> str:
        """
        Replace the session ID with a new one (e.g., after login).

        The store is not touched: the caller must save under the new ID
        and delete the record stored under the old one.

        Args:
            generator: Identifier generator (defaults to the global one)

        Returns:
            The previous session ID
        """
        generator = generator or get_id_generator()
        old_id = self.id
        self.id = generator.generate()
        self.is_modified = True
        return old_id

    def to_dict(self) -> dict:
        """Convert to dictionary for admin/debug output"""
        return {
            "id": self.id,
            "data": dict(self.data),
            "is_new": self.is_new,
            "is_modified": self.is_modified,
            "created_at": self.created_at,
            "last_accessed": self.last_accessed,
            "expires_at": self.expires_at,
        }
