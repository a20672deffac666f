from enum import Enum

class Role(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
