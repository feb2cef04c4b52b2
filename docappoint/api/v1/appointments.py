from fastapi import APIRouter, Depends, Query, status
from datetime import date
from typing import List, Optional

from ...api.deps import (
    get_appointment_manager, get_current_user, raise_for_result, NotFoundError
)
from ...models.appointment import Appointment
from ...models.user import User
from ...schemas.appointment import (
    AppointmentCreate, AppointmentResponse, RescheduleRequest
)
from ...services.appointment_service import AppointmentManager

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def schedule_appointment(
    appointment_data: AppointmentCreate,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Book an appointment in an open slot."""
    patient = manager.get_patient(appointment_data.patient_id)
    if patient is None:
        raise NotFoundError(f"Patient {appointment_data.patient_id} not found")

    doctor = manager.get_doctor(appointment_data.doctor_id)
    if doctor is None:
        raise NotFoundError(f"Doctor {appointment_data.doctor_id} not found")

    appointment = Appointment(
        appointment_id=appointment_data.appointment_id,
        patient=patient,
        doctor=doctor,
        appointment_date=appointment_data.appointment_date,
    )
    result = raise_for_result(manager.schedule_appointment(appointment))
    return AppointmentResponse.from_appointment(result.appointment)

@router.get("", response_model=List[AppointmentResponse])
async def search_appointments(
    patient_name: Optional[str] = None,
    doctor_name: Optional[str] = None,
    appointment_date: Optional[date] = Query(None, alias="date"),
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """List appointments, optionally filtered by patient, doctor and date."""
    results = manager.search_appointments(
        patient_name=patient_name,
        doctor_name=doctor_name,
        appointment_date=appointment_date,
    )
    return [AppointmentResponse.from_appointment(a) for a in results]

@router.post("/reminders", response_model=List[AppointmentResponse])
async def send_reminders(
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Send reminders for appointments inside the reminder window."""
    return [AppointmentResponse.from_appointment(a) for a in manager.send_reminders()]

@router.delete("/{appointment_id}", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Cancel an appointment and reopen its slot."""
    result = raise_for_result(manager.cancel_appointment(appointment_id))
    return AppointmentResponse.from_appointment(result.appointment)

@router.patch("/{appointment_id}/reschedule", response_model=AppointmentResponse)
async def reschedule_appointment(
    appointment_id: int,
    reschedule_data: RescheduleRequest,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Move an appointment to another open slot of the same doctor."""
    result = raise_for_result(
        manager.reschedule_appointment(appointment_id, reschedule_data.new_date)
    )
    return AppointmentResponse.from_appointment(result.appointment)

@router.post("/{appointment_id}/confirm", response_model=AppointmentResponse)
async def confirm_appointment(
    appointment_id: int,
    manager: AppointmentManager = Depends(get_appointment_manager),
    _: User = Depends(get_current_user)
):
    """Confirm an appointment."""
    result = raise_for_result(manager.confirm_appointment(appointment_id))
    return AppointmentResponse.from_appointment(result.appointment)
