from datetime import datetime
from sqlmodel import Field, SQLModel
from pydantic import EmailStr

# ==========================================
# SQLModel (Database Entity + Base Pydantic)
# ==========================================
class Patient(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    age: int
    contact: str
    gender: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive via API on signup
class PatientCreate(SQLModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    age: int = Field(gt=0)
    contact: str = Field(min_length=1)
    gender: str = Field(min_length=1)

# Properties to return via API
class PatientResponse(SQLModel):
    id: int
    name: str
    email: str
    age: int
    contact: str
    gender: str
