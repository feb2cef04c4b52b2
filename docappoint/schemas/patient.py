from pydantic import BaseModel, Field
from typing import List

from ..models.patient import Patient

class PatientCreate(BaseModel):
    patient_id: int
    name: str = Field(..., min_length=1)
    email: str
    phone_number: str

class PatientResponse(BaseModel):
    patient_id: int
    name: str
    email: str
    phone_number: str

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientResponse":
        return cls(
            patient_id=patient.patient_id,
            name=patient.name,
            email=patient.email,
            phone_number=patient.phone_number,
        )

class MedicalHistoryEntry(BaseModel):
    entry: str = Field(..., min_length=1)

class MedicalHistoryResponse(BaseModel):
    patient_id: int
    entries: List[str]
