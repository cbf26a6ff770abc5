"""In-process session management with signed session ids."""

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class InMemorySessionStore:
    """
    Session store living in process memory.

    Entries expire ``ttl`` seconds after their last write. Nothing
    survives a restart.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data."""
        if session_id not in self._sessions:
            return None

        data, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        return data

    async def set(
        self,
        session_id: str,
        data: dict[str, Any],
        ttl: int | None = None,
    ) -> None:
        """Set session data."""
        expiry = datetime.now() + timedelta(seconds=ttl or self._ttl)
        self._sessions[session_id] = (data, expiry)

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def exists(self, session_id: str) -> bool:
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            sid for sid, (_, expiry) in self._sessions.items() if expiry < now
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Expired %d sessions", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
_session_store: InMemorySessionStore | None = None


def get_session_store() -> InMemorySessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


async def create_session(data: dict[str, Any] | None = None) -> str:
    """
    Create a new session.

    Returns:
        A signed session token
    """
    store = get_session_store()
    # Abandoned tables are only evicted here or on a later read
    await store.cleanup_expired()

    session_id = str(uuid4())
    await store.set(session_id, data or {})
    return get_session_signer().sign(session_id)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)


async def get_session(token: str) -> dict[str, Any] | None:
    """Get session data for a signed token."""
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    return await get_session_store().get(session_id)


async def update_session(token: str, data: dict[str, Any]) -> None:
    """Update session data for a signed token."""
    session_id = extract_session_id(token)
    if session_id is None:
        raise KeyError("Invalid session token")
    await get_session_store().set(session_id, data)
