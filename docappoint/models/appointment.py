from pydantic import BaseModel
from datetime import datetime
import logging

from .doctor import Doctor
from .patient import Patient

logger = logging.getLogger(__name__)

class Appointment(BaseModel):
    appointment_id: int

    # References, not copies: the manager's patient and doctor instances
    patient: Patient
    doctor: Doctor

    # Appointment details
    appointment_date: datetime
    is_confirmed: bool = False

    def confirm(self) -> None:
        """Mark the appointment as confirmed."""
        self.is_confirmed = True
        logger.info(
            f"Appointment {self.appointment_id} confirmed for {self.patient.name} "
            f"with Dr. {self.doctor.name} on {self.appointment_date}"
        )

    def send_reminder(self) -> None:
        logger.info(
            f"Reminder: Appointment {self.appointment_id} is scheduled for {self.patient.name} "
            f"with Dr. {self.doctor.name} on {self.appointment_date}"
        )

    def reschedule(self, new_date: datetime) -> None:
        """Move the appointment to a new date.

        Only changes the appointment itself; the doctor's ledger is kept in
        step by AppointmentManager.reschedule_appointment.
        """
        self.appointment_date = new_date
        logger.info(
            f"Appointment {self.appointment_id} rescheduled to {new_date} "
            f"for {self.patient.name} with Dr. {self.doctor.name}"
        )

    def summary(self) -> str:
        return (
            f"ID: {self.appointment_id}, Patient: {self.patient.name}, Doctor: {self.doctor.name}, "
            f"Date: {self.appointment_date}, Confirmed: {self.is_confirmed}"
        )

    def __repr__(self):
        return f"<Appointment(id={self.appointment_id}, patient_id={self.patient.patient_id}, doctor_id={self.doctor.doctor_id}, date='{self.appointment_date}')>"
