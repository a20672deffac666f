from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..audit.service import describe, log_event
from ..auth.service import check_ownership, get_current_doctor, get_current_patient, get_current_principal
from ..auth.tokens import Principal
from ..core.database import get_session
from ..models.Consultation import ConsultationCreate, ConsultationReschedule, ConsultationResponse
from ..models.Doctor import DoctorResponse
from ..models.Role import Role
from .service import (
    book_consultation,
    get_all_doctors,
    get_consultation,
    get_doctor_consultations,
    get_user_consultations,
    reschedule_consultation,
)

router = APIRouter(tags=["consultations"])

def _serialize(consultations) -> list[dict]:
    return [ConsultationResponse.model_validate(c).model_dump(mode="json") for c in consultations]


@router.post("/consultation/book")
async def book(
    data: ConsultationCreate,
    current_patient: Annotated[Principal, Depends(get_current_patient)],
    session: Session = Depends(get_session),
):
    """
    Book a consultation for the logged in patient.
    """
    user_id = data.user_id if data.user_id is not None else current_patient.identity
    check_ownership(current_patient, user_id, Role.PATIENT)

    consultation = book_consultation(session, user_id, data)
    log_event(
        session, current_patient.identity,
        describe("POST", "/consultation/book", status.HTTP_200_OK),
        f"Consultation {consultation.id} booked with doctor {data.doctor_id}",
        Role.PATIENT.value,
    )
    return {"success": True, "message": "Consultation booked", "consultationId": consultation.id}


@router.get("/user/{user_id}/history")
async def history(
    user_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Session = Depends(get_session),
):
    """
    Consultation history of a patient, visible only to that patient.
    """
    check_ownership(principal, user_id, Role.PATIENT)
    return {"success": True, "consultations": _serialize(get_user_consultations(session, user_id))}


@router.get("/doctor/{doctor_id}/consultations")
async def doctor_schedule(
    doctor_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Session = Depends(get_session),
):
    check_ownership(principal, doctor_id, Role.DOCTOR)
    return {"success": True, "consultations": _serialize(get_doctor_consultations(session, doctor_id))}


@router.put("/doctor/consultation/{consultation_id}/reschedule")
async def reschedule(
    consultation_id: int,
    data: ConsultationReschedule,
    current_doctor: Annotated[Principal, Depends(get_current_doctor)],
    session: Session = Depends(get_session),
):
    """
    Move a consultation to a new slot. Only the assigned doctor may do this.
    """
    consultation = get_consultation(session, consultation_id)
    # Unknown ids get the same answer as another doctor's consultation
    check_ownership(current_doctor, consultation.doctor_id if consultation else None, Role.DOCTOR)

    consultation = reschedule_consultation(session, consultation, data)
    log_event(
        session, current_doctor.identity,
        describe("PUT", f"/doctor/consultation/{consultation_id}/reschedule", status.HTTP_200_OK),
        f"Consultation rescheduled to {data.date} {data.time}",
        Role.DOCTOR.value,
    )
    return {
        "success": True,
        "message": "Consultation rescheduled",
        "consultation": ConsultationResponse.model_validate(consultation).model_dump(mode="json"),
    }


@router.get("/doctors", response_model=list[DoctorResponse])
async def list_doctors(session: Session = Depends(get_session)):
    return get_all_doctors(session)
