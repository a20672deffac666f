from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel

class ConsultationStatus(str, Enum):
    BOOKED = "booked"
    RESCHEDULED = "rescheduled"

class Consultation(SQLModel, table=True):
    __tablename__ = "consultations"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    date: str # YYYY-MM-DD, as sent by the booking form
    time: str # HH:MM
    reason: str
    status: ConsultationStatus = Field(default=ConsultationStatus.BOOKED)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class ConsultationCreate(SQLModel):
    user_id: int | None = None # Defaults to the authenticated patient
    doctor_id: int
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    reason: str = Field(min_length=1)

class ConsultationReschedule(SQLModel):
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)

class ConsultationResponse(SQLModel):
    id: int
    user_id: int
    doctor_id: int
    date: str
    time: str
    reason: str
    status: ConsultationStatus
    created_at: datetime
