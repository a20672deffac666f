from datetime import datetime
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session, select

from ..models.Consultation import Consultation, ConsultationCreate, ConsultationReschedule, ConsultationStatus
from ..models.Doctor import Doctor

def book_consultation(session: Session, user_id: int, data: ConsultationCreate) -> Consultation:
    if session.get(Doctor, data.doctor_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    consultation = Consultation(
        user_id=user_id,
        doctor_id=data.doctor_id,
        date=data.date,
        time=data.time,
        reason=data.reason,
    )
    session.add(consultation)
    session.commit()
    session.refresh(consultation)
    return consultation

def get_user_consultations(session: Session, user_id: int) -> list[Consultation]:
    statement = (
        select(Consultation)
        .where(Consultation.user_id == user_id)
        .order_by(Consultation.created_at.desc(), Consultation.id.desc())
    )
    return session.exec(statement).all()

def get_doctor_consultations(session: Session, doctor_id: int) -> list[Consultation]:
    statement = (
        select(Consultation)
        .where(Consultation.doctor_id == doctor_id)
        .order_by(Consultation.date, Consultation.time)
    )
    return session.exec(statement).all()

def get_consultation(session: Session, consultation_id: int) -> Optional[Consultation]:
    return session.get(Consultation, consultation_id)

def reschedule_consultation(session: Session, consultation: Consultation, data: ConsultationReschedule) -> Consultation:
    consultation.date = data.date
    consultation.time = data.time
    consultation.status = ConsultationStatus.RESCHEDULED
    consultation.updated_at = datetime.utcnow()
    session.add(consultation)
    session.commit()
    session.refresh(consultation)
    return consultation

def get_all_doctors(session: Session) -> list[Doctor]:
    return session.exec(select(Doctor).order_by(Doctor.name)).all()
