"""
Bearer token issuance and verification.

Tokens are HS256 JWTs carrying ``sub`` (principal id), ``role``, ``iat``,
``exp`` and a random ``jti``. Verification always consults the revocation
registry before the signature is checked, so a logged-out token is rejected
even while it is still cryptographically valid.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional
import binascii
import uuid

from jose import ExpiredSignatureError, JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

from ..models.Role import Role
from .revocation import RevocationRegistry


class ForbiddenReason(str, Enum):
    REVOKED = "revoked"
    INVALID_SIGNATURE = "invalid-signature"
    EXPIRED = "expired"
    OWNERSHIP_MISMATCH = "ownership-mismatch"
    ROLE_MISMATCH = "role-mismatch"


class AuthError(Exception):
    """Base class for authentication and authorization failures."""


class Unauthenticated(AuthError):
    """No credential could be extracted from the request."""


class Forbidden(AuthError):
    """A credential was supplied but rejected. `reason` is for server logs only."""

    def __init__(self, reason: ForbiddenReason):
        super().__init__(reason.value)
        self.reason = reason


class InvalidPrincipal(ValueError):
    """Token issuance was asked for a malformed identity or role."""


@dataclass(frozen=True)
class AuthConfig:
    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(minutes=60)

    def __post_init__(self):
        if not self.secret:
            raise ValueError("A signing secret is required")
        if self.ttl <= timedelta(0):
            raise ValueError("Token validity window must be positive")


@dataclass(frozen=True)
class Principal:
    identity: int
    role: Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validate_principal(identity, role) -> tuple[int, Role]:
    # bool is an int subclass; True is not a principal id
    if isinstance(identity, bool) or not isinstance(identity, int) or identity <= 0:
        raise InvalidPrincipal(f"Invalid identity: {identity!r}")
    try:
        return identity, Role(role)
    except ValueError:
        raise InvalidPrincipal(f"Invalid role: {role!r}")


class TokenIssuer:
    def __init__(self, config: AuthConfig, clock: Optional[Callable[[], datetime]] = None):
        self.config = config
        self.clock = clock or _utcnow

    def issue(self, identity: int, role: Role | str) -> str:
        """
        Signs a token for (identity, role) valid for `config.ttl`.
        """
        identity, role = _validate_principal(identity, role)
        issued_at = self.clock()
        expire = issued_at + self.config.ttl
        to_encode = {
            "sub": str(identity),
            "role": role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self.config.secret, algorithm=self.config.algorithm)


def extract_bearer(header_value: Optional[str]) -> str:
    """
    Returns the token part of an "<scheme> <token>" header value.
    """
    if not header_value:
        raise Unauthenticated()
    parts = header_value.split(" ")
    if len(parts) < 2 or not parts[1]:
        raise Unauthenticated()
    return parts[1]


def has_canonical_segments(token: str) -> bool:
    """
    True when the token has three segments and each one is the canonical
    unpadded base64url encoding of its bytes. A decoder ignores the unused
    low bits of a final character, so without this check a token with its
    last character changed can still verify.
    """
    segments = token.split(".")
    if len(segments) != 3:
        return False
    try:
        for segment in segments:
            raw = segment.encode("ascii")
            if base64url_encode(base64url_decode(raw)) != raw:
                return False
    except (binascii.Error, ValueError, TypeError):
        return False
    return True


class TokenAuthenticator:
    def __init__(self, config: AuthConfig, registry: RevocationRegistry):
        self.config = config
        self.registry = registry

    def authenticate(self, header_value: Optional[str]) -> Principal:
        token = extract_bearer(header_value)

        # Revocation is checked first and independently of the signature
        if self.registry.is_revoked(token):
            raise Forbidden(ForbiddenReason.REVOKED)

        if not has_canonical_segments(token):
            raise Forbidden(ForbiddenReason.INVALID_SIGNATURE)

        try:
            payload = jwt.decode(token, self.config.secret, algorithms=[self.config.algorithm])
        except ExpiredSignatureError:
            raise Forbidden(ForbiddenReason.EXPIRED)
        except JWTError:
            raise Forbidden(ForbiddenReason.INVALID_SIGNATURE)

        return self._principal_from(payload)

    def revoke(self, header_value: Optional[str]) -> Principal:
        """
        Authenticates the header and then blacklists its token (logout).
        """
        principal = self.authenticate(header_value)
        self.registry.revoke(extract_bearer(header_value))
        return principal

    @staticmethod
    def _principal_from(payload: dict) -> Principal:
        sub = payload.get("sub")
        role = payload.get("role")
        if not isinstance(sub, str) or not sub.isdigit() or not isinstance(role, str):
            raise Forbidden(ForbiddenReason.INVALID_SIGNATURE)
        try:
            return Principal(identity=int(sub), role=Role(role))
        except ValueError:
            raise Forbidden(ForbiddenReason.INVALID_SIGNATURE)
