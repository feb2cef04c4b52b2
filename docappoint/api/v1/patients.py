from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import (
    get_appointment_manager, get_current_user, get_admin_user, NotFoundError
)
from ...models.patient import Patient
from ...models.user import User
from ...schemas.patient import (
    PatientCreate, PatientResponse, MedicalHistoryEntry, MedicalHistoryResponse
)
from ...services.appointment_service import AppointmentManager

router = APIRouter(prefix="/patients", tags=["Patients"])

def _get_patient_or_404(manager: AppointmentManager, patient_id: int) -> Patient:
    patient = manager.get_patient(patient_id)
    if patient is None:
        raise NotFoundError(f"Patient {patient_id} not found")
    return patient

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def add_patient(
    patient_data: PatientCreate,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_admin_user)
):
    """Register a patient (admin only)."""
    patient = manager.add_patient(Patient(**patient_data.model_dump()))
    return PatientResponse.from_patient(patient)

@router.get("", response_model=List[PatientResponse])
async def list_patients(
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """List all patients."""
    return [PatientResponse.from_patient(p) for p in manager.list_patients()]

@router.get("/{patient_id}/history", response_model=MedicalHistoryResponse)
async def get_medical_history(
    patient_id: int,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Get a patient's medical history."""
    patient = _get_patient_or_404(manager, patient_id)
    return MedicalHistoryResponse(patient_id=patient_id, entries=patient.show_medical_history())

@router.post("/{patient_id}/history", response_model=MedicalHistoryResponse)
async def add_medical_history_entry(
    patient_id: int,
    history_data: MedicalHistoryEntry,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Append an entry to a patient's medical history."""
    patient = _get_patient_or_404(manager, patient_id)
    patient.add_to_medical_history(history_data.entry)
    return MedicalHistoryResponse(patient_id=patient_id, entries=list(patient.medical_history))
