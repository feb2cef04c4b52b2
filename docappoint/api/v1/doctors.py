from fastapi import APIRouter, Depends, Query, status
from datetime import datetime
from typing import List

from ...api.deps import (
    get_appointment_manager, get_current_user, get_admin_user,
    get_doctor_user, NotFoundError
)
from ...models.doctor import Doctor
from ...models.user import User
from ...schemas.doctor import (
    DoctorCreate, DoctorResponse, AvailabilityUpdate, AvailabilityResponse
)
from ...services.appointment_service import AppointmentManager

router = APIRouter(prefix="/doctors", tags=["Doctors"])

def _get_doctor_or_404(manager: AppointmentManager, doctor_id: int) -> Doctor:
    doctor = manager.get_doctor(doctor_id)
    if doctor is None:
        raise NotFoundError(f"Doctor {doctor_id} not found")
    return doctor

@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def add_doctor(
    doctor_data: DoctorCreate,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_admin_user)
):
    """Register a doctor (admin only)."""
    doctor = manager.add_doctor(Doctor(**doctor_data.model_dump()))
    return DoctorResponse.from_doctor(doctor)

@router.get("", response_model=List[DoctorResponse])
async def list_doctors(
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """List all doctors with their open slots."""
    return [DoctorResponse.from_doctor(d) for d in manager.list_doctors()]

@router.put("/{doctor_id}/availability", response_model=AvailabilityResponse)
async def set_availability(
    doctor_id: int,
    availability: AvailabilityUpdate,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_doctor_user)
):
    """Open or close a slot (doctor or admin)."""
    doctor = _get_doctor_or_404(manager, doctor_id)
    doctor.set_availability(availability.slot, availability.is_available)
    return AvailabilityResponse(
        doctor_id=doctor_id,
        slot=availability.slot,
        is_available=doctor.is_available(availability.slot)
    )

@router.get("/{doctor_id}/availability", response_model=AvailabilityResponse)
async def check_availability(
    doctor_id: int,
    slot: datetime = Query(...),
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Check whether a slot is open."""
    doctor = _get_doctor_or_404(manager, doctor_id)
    return AvailabilityResponse(doctor_id=doctor_id, slot=slot, is_available=doctor.is_available(slot))
