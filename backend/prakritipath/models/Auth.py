from sqlmodel import Field, SQLModel
from .Patient import PatientResponse
from .Doctor import DoctorResponse

# Properties to receive via API on login
class LoginRequest(SQLModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

class PatientLoginResponse(SQLModel):
    success: bool = True
    message: str = "Login successful"
    user: PatientResponse
    token: str

class DoctorLoginResponse(SQLModel):
    success: bool = True
    message: str = "Login successful"
    doctor: DoctorResponse
    token: str
