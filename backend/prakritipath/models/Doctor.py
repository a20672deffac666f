from datetime import datetime
from sqlmodel import Field, SQLModel
from pydantic import EmailStr

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    center: str
    specialization: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

class DoctorCreate(SQLModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    center: str = Field(min_length=1)
    specialization: str = Field(min_length=1)

class DoctorResponse(SQLModel):
    id: int
    name: str
    email: str
    center: str
    specialization: str
