from datetime import timedelta
from functools import lru_cache
from typing import Annotated
import logging
import threading

from fastapi import Depends, HTTPException, status, Header
from passlib.context import CryptContext
from sqlmodel import Session, select

from ..core.database import engine
from ..core.settings import settings
from ..models.Doctor import Doctor
from ..models.Patient import Patient
from ..models.Role import Role
from .ownership import ensure_owner, ensure_role
from .revocation import DatabaseRevocationRegistry, InMemoryRevocationRegistry
from .tokens import AuthConfig, Forbidden, Principal, TokenAuthenticator, TokenIssuer, Unauthenticated

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=102400,
    argon2__parallelism=8
)

# Verified against when the account does not exist, so unknown emails cost the same as wrong passwords
_DUMMY_HASH = pwd_context.hash("prakritipath-dummy-password")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password + settings.PASSWORD_PEPPER, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password + settings.PASSWORD_PEPPER)


def auth_config_from_settings() -> AuthConfig:
    return AuthConfig(
        secret=settings.JWT_SECRET,
        algorithm=settings.ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

@lru_cache
def get_issuer() -> TokenIssuer:
    return TokenIssuer(auth_config_from_settings())

# One authenticator (and so one revocation registry) per process
_authenticator: TokenAuthenticator | None = None
_authenticator_lock = threading.Lock()

def get_authenticator() -> TokenAuthenticator:
    global _authenticator
    with _authenticator_lock:
        if _authenticator is None:
            _authenticator = TokenAuthenticator(auth_config_from_settings(), _build_registry())
        return _authenticator

def _build_registry():
    if settings.REVOCATION_BACKEND == "database":
        return DatabaseRevocationRegistry(engine)
    return InMemoryRevocationRegistry()


def raise_for_auth_error(exc: Unauthenticated | Forbidden):
    """
    Turns an auth failure into a generic HTTP error. The reason is logged, never returned.
    """
    if isinstance(exc, Unauthenticated):
        logger.warning("Authentication failed: unauthenticated")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.warning("Authentication failed: %s", exc.reason.value)
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


async def get_current_principal(
    authenticator: Annotated[TokenAuthenticator, Depends(get_authenticator)],
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    try:
        return authenticator.authenticate(authorization)
    except (Unauthenticated, Forbidden) as exc:
        raise_for_auth_error(exc)

async def get_current_patient(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
    return check_role(principal, Role.PATIENT)

async def get_current_doctor(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
    return check_role(principal, Role.DOCTOR)


def check_role(principal: Principal, role: Role) -> Principal:
    try:
        return ensure_role(principal, role)
    except Forbidden as exc:
        logger.warning(
            "Authorization failed: %s (principal=%s/%s, required=%s)",
            exc.reason.value, principal.role.value, principal.identity, role.value,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

def check_ownership(principal: Principal, owner_id: int | None, role: Role = Role.PATIENT) -> Principal:
    try:
        return ensure_owner(principal, owner_id, role)
    except Forbidden as exc:
        logger.warning(
            "Authorization failed: %s (principal=%s/%s, owner=%s/%s)",
            exc.reason.value, principal.role.value, principal.identity, role.value, owner_id,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


async def authenticate_patient(session: Session, email: str, password: str):
    patient = session.exec(select(Patient).where(Patient.email == email)).first()
    if not patient:
        verify_password(password, _DUMMY_HASH)
        return False
    if not verify_password(password, patient.hashed_password):
        return False
    return patient

async def authenticate_doctor(session: Session, email: str, password: str):
    doctor = session.exec(select(Doctor).where(Doctor.email == email)).first()
    if not doctor:
        verify_password(password, _DUMMY_HASH)
        return False
    if not verify_password(password, doctor.hashed_password):
        return False
    return doctor
