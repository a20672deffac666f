from typing import Annotated
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Header
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..audit.service import describe, log_event
from ..core.database import get_session
from ..models.Auth import LoginRequest, PatientLoginResponse, DoctorLoginResponse
from ..models.Doctor import Doctor, DoctorCreate, DoctorResponse
from ..models.Patient import Patient, PatientCreate, PatientResponse
from ..models.Role import Role
from .service import (
    authenticate_doctor,
    authenticate_patient,
    get_authenticator,
    get_issuer,
    get_password_hash,
    raise_for_auth_error,
)
from .tokens import Forbidden, TokenAuthenticator, TokenIssuer, Unauthenticated

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


def _email_taken(session: Session, model, email: str) -> bool:
    return session.exec(select(model).where(model.email == email)).first() is not None

def _store_account(session: Session, account):
    session.add(account)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")
    session.refresh(account)
    return account


@router.post("/user/signup")
async def signup_patient(data: PatientCreate, session: Session = Depends(get_session)):
    """
    Register a new patient account.
    """
    if _email_taken(session, Patient, data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    patient = _store_account(session, Patient(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        age=data.age,
        contact=data.contact,
        gender=data.gender,
    ))
    log_event(session, patient.id, describe("POST", "/user/signup", status.HTTP_200_OK), "Patient registered", Role.PATIENT.value)
    return {"success": True, "message": "User registered successfully"}


@router.post("/user/login", response_model=PatientLoginResponse)
async def login_patient(
    login_data: LoginRequest,
    issuer: Annotated[TokenIssuer, Depends(get_issuer)],
    session: Session = Depends(get_session),
):
    """
    Login with email and password to get an access token.
    """
    patient = await authenticate_patient(session, login_data.email, login_data.password)
    if not patient:
        log_event(session, 0, describe("POST", "/user/login", status.HTTP_401_UNAUTHORIZED), INVALID_CREDENTIALS, Role.PATIENT.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = issuer.issue(patient.id, Role.PATIENT)
    log_event(session, patient.id, describe("POST", "/user/login", status.HTTP_200_OK), "Login successful", Role.PATIENT.value)
    return PatientLoginResponse(user=PatientResponse.model_validate(patient), token=token)


@router.post("/doctor/signup")
async def signup_doctor(data: DoctorCreate, session: Session = Depends(get_session)):
    """
    Register a new doctor account.
    """
    if _email_taken(session, Doctor, data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already exists")

    doctor = _store_account(session, Doctor(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        center=data.center,
        specialization=data.specialization,
    ))
    log_event(session, doctor.id, describe("POST", "/doctor/signup", status.HTTP_200_OK), "Doctor registered", Role.DOCTOR.value)
    return {"success": True, "message": "Doctor registered successfully"}


@router.post("/doctor/login", response_model=DoctorLoginResponse)
async def login_doctor(
    login_data: LoginRequest,
    issuer: Annotated[TokenIssuer, Depends(get_issuer)],
    session: Session = Depends(get_session),
):
    doctor = await authenticate_doctor(session, login_data.email, login_data.password)
    if not doctor:
        log_event(session, 0, describe("POST", "/doctor/login", status.HTTP_401_UNAUTHORIZED), INVALID_CREDENTIALS, Role.DOCTOR.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = issuer.issue(doctor.id, Role.DOCTOR)
    log_event(session, doctor.id, describe("POST", "/doctor/login", status.HTTP_200_OK), "Login successful", Role.DOCTOR.value)
    return DoctorLoginResponse(doctor=DoctorResponse.model_validate(doctor), token=token)


@router.post("/logout")
async def logout(
    authenticator: Annotated[TokenAuthenticator, Depends(get_authenticator)],
    authorization: Annotated[str | None, Header()] = None,
    session: Session = Depends(get_session),
):
    """
    Logout: the presented token is blacklisted and rejected from now on.
    """
    try:
        principal = authenticator.revoke(authorization)
    except (Unauthenticated, Forbidden) as exc:
        raise_for_auth_error(exc)

    logger.info("Token revoked for %s/%s", principal.role.value, principal.identity)
    log_event(session, principal.identity, describe("POST", "/logout", status.HTTP_200_OK), "Logged out successfully", principal.role.value)
    return {"success": True, "message": "Logged out successfully"}
