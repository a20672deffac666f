from datetime import datetime, timezone
from typing import Protocol
import hashlib
import threading

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from ..models.RevokedToken import RevokedToken


def token_id(token: str) -> str:
    """Identifier under which a raw bearer token is blacklisted."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RevocationRegistry(Protocol):
    """Set of tokens rejected regardless of signature or expiry."""

    def revoke(self, token: str) -> None:
        """Blacklist `token`. Revoking twice is a no-op."""

    def is_revoked(self, token: str) -> bool:
        """Return ``True`` when `token` has been blacklisted."""


class InMemoryRevocationRegistry:
    """
    Process-local blacklist. Entries are never evicted and are lost on
    restart; other server processes do not see them.
    """

    def __init__(self):
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def revoke(self, token: str) -> None:
        with self._lock:
            self._revoked.setdefault(token_id(token), datetime.now(timezone.utc))

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token_id(token) in self._revoked

    def revoked_at(self, token: str) -> datetime | None:
        with self._lock:
            return self._revoked.get(token_id(token))

    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)


class DatabaseRevocationRegistry:
    """
    Blacklist stored in the `revoked_tokens` table, shared by every process
    using the same database. Entries are never evicted.
    """

    def __init__(self, engine):
        self.engine = engine

    def revoke(self, token: str) -> None:
        tid = token_id(token)
        with Session(self.engine) as session:
            if session.get(RevokedToken, tid) is not None:
                return
            session.add(RevokedToken(token_id=tid, revoked_at=datetime.now(timezone.utc)))
            try:
                session.commit()
            except IntegrityError:
                # Another request revoked the same token first
                session.rollback()

    def is_revoked(self, token: str) -> bool:
        with Session(self.engine) as session:
            return session.get(RevokedToken, token_id(token)) is not None
