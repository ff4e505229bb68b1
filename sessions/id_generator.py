"""
Identifier Generator - Produces unguessable session identifiers
"""
import logging
import secrets
from typing import Callable, Optional

import config

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]

SESSION_ID_LENGTH = config.SESSION_ID_BYTES * 2


class RandomSourceError(RuntimeError):
    """Raised when the random source cannot produce an identifier"""


class IdGenerator:
    """
    Generates 128-bit session identifiers encoded as lowercase hex.

    The random source is any callable taking a byte count and returning that
    many bytes. It defaults to ``secrets.token_bytes`` (the OS CSPRNG), which
    is safe to call from concurrent threads.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random_source = random_source or secrets.token_bytes
        self._nbytes = config.SESSION_ID_BYTES

    def generate(self) -> str:
        """
        Generate a new session ID.

        Returns:
            32-character lowercase hex identifier

        Raises:
            RandomSourceError: If the random source fails or returns
                the wrong number of bytes
        """
        try:
            raw = self._random_source(self._nbytes)
        except Exception as e:
            logger.critical("[SESSION] Random source failed: %s", e)
            raise RandomSourceError(f"Random source failed: {e}") from e

        if not isinstance(raw, (bytes, bytearray)) or len(raw) != self._nbytes:
            logger.critical("[SESSION] Random source returned malformed output")
            raise RandomSourceError(
                f"Random source must return {self._nbytes} bytes"
            )

        return bytes(raw).hex()


# Global instance
_id_generator = IdGenerator()


def get_id_generator() -> IdGenerator:
    """Get the global identifier generator instance"""
    return _id_generator


def generate_session_id() -> str:
    """
    Generate a secure session ID.

    Returns:
        Unique session identifier
    """
    return _id_generator.generate()
