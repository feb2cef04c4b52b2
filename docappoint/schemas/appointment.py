from pydantic import BaseModel
from datetime import datetime

from ..models.appointment import Appointment

class AppointmentCreate(BaseModel):
    appointment_id: int
    patient_id: int
    doctor_id: int
    appointment_date: datetime

class RescheduleRequest(BaseModel):
    new_date: datetime

class AppointmentResponse(BaseModel):
    appointment_id: int
    patient_id: int
    patient_name: str
    doctor_id: int
    doctor_name: str
    appointment_date: datetime
    is_confirmed: bool

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            appointment_id=appointment.appointment_id,
            patient_id=appointment.patient.patient_id,
            patient_name=appointment.patient.name,
            doctor_id=appointment.doctor.doctor_id,
            doctor_name=appointment.doctor.name,
            appointment_date=appointment.appointment_date,
            is_confirmed=appointment.is_confirmed,
        )
