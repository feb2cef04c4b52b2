from pydantic import BaseModel, Field
from datetime import datetime
from typing import List

from ..models.doctor import Doctor

class DoctorCreate(BaseModel):
    doctor_id: int
    name: str = Field(..., min_length=1)
    specialty: str

class DoctorResponse(BaseModel):
    doctor_id: int
    name: str
    specialty: str
    available_slots: List[datetime] = []

    @classmethod
    def from_doctor(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            doctor_id=doctor.doctor_id,
            name=doctor.name,
            specialty=doctor.specialty,
            available_slots=doctor.available_slots(),
        )

class AvailabilityUpdate(BaseModel):
    slot: datetime
    is_available: bool = True

class AvailabilityResponse(BaseModel):
    doctor_id: int
    slot: datetime
    is_available: bool
