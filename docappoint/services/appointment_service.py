from datetime import date, datetime
from typing import Callable, List, Optional, Union
import logging

from ..core.config import settings
from ..models.appointment import Appointment
from ..models.doctor import Doctor
from ..models.patient import Patient
from ..schemas.scheduling import OperationStatus, SchedulingResult
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

AppointmentFilter = Callable[[Appointment], bool]

class AppointmentManager:
    """In-memory owner of patients, doctors and appointments.

    Every booking change goes through this class so that each doctor's
    availability ledger stays in step with the appointment list. The
    manager is not thread-safe; an embedding program that shares one
    instance across threads must serialise access itself.

    Identifiers are assigned by the caller and are not checked for
    uniqueness. Lookups return the first match in insertion order.
    """

    def __init__(self, notification_service: Optional[NotificationService] = None):
        self._appointments: List[Appointment] = []
        self._patients: List[Patient] = []
        self._doctors: List[Doctor] = []
        self.notification_service = notification_service or NotificationService()

    # Patients
    def add_patient(self, patient: Patient) -> Patient:
        if patient is None:
            raise ValueError("patient is required")
        self._patients.append(patient)
        logger.info(f"Patient {patient.name} added.")
        return patient

    def list_patients(self) -> List[Patient]:
        logger.info("Patients List:")
        for patient in self._patients:
            logger.info(str(patient))
        return list(self._patients)

    def get_patient(self, patient_id: int) -> Optional[Patient]:
        return next((p for p in self._patients if p.patient_id == patient_id), None)

    # Doctors
    def add_doctor(self, doctor: Doctor) -> Doctor:
        if doctor is None:
            raise ValueError("doctor is required")
        self._doctors.append(doctor)
        logger.info(f"Doctor {doctor.name} added.")
        return doctor

    def list_doctors(self) -> List[Doctor]:
        logger.info("Doctors List:")
        for doctor in self._doctors:
            logger.info(str(doctor))
        return list(self._doctors)

    def get_doctor(self, doctor_id: int) -> Optional[Doctor]:
        return next((d for d in self._doctors if d.doctor_id == doctor_id), None)

    # Appointments
    def schedule_appointment(self, appointment: Appointment) -> SchedulingResult:
        """Book an appointment if its doctor has the slot open.

        On success the slot is closed on the doctor's ledger and the patient
        is notified. The appointment is not confirmed here.
        """
        if appointment is None:
            raise ValueError("appointment is required")

        doctor = appointment.doctor
        slot = appointment.appointment_date
        if not doctor.is_available(slot):
            message = f"Doctor {doctor.name} is not available on {slot}"
            logger.info(message)
            return SchedulingResult(status=OperationStatus.DOCTOR_UNAVAILABLE, message=message)

        self._appointments.append(appointment)
        doctor.set_availability(slot, False)

        message = (
            f"Appointment {appointment.appointment_id} scheduled for {appointment.patient.name} "
            f"with Dr. {doctor.name} on {slot}"
        )
        logger.info(message)

        self._notify_patient(
            appointment,
            "Appointment Confirmation",
            f"Your appointment with Dr. {doctor.name} is confirmed for {slot}",
        )
        return SchedulingResult(status=OperationStatus.SUCCESS, message=message, appointment=appointment)

    def cancel_appointment(self, appointment_id: int) -> SchedulingResult:
        """Remove an appointment and reopen its slot."""
        index = self._find_index(appointment_id)
        if index is None:
            return self._not_found(appointment_id)

        appointment = self._appointments.pop(index)
        slot = appointment.appointment_date
        appointment.doctor.set_availability(slot, True)

        message = (
            f"Appointment {appointment_id} for {appointment.patient.name} "
            f"with Dr. {appointment.doctor.name} has been canceled."
        )
        logger.info(message)

        self._notify_patient(
            appointment,
            "Appointment Cancellation",
            f"Your appointment with Dr. {appointment.doctor.name} on {slot} has been canceled.",
        )
        return SchedulingResult(status=OperationStatus.SUCCESS, message=message, appointment=appointment)

    def reschedule_appointment(self, appointment_id: int, new_date: datetime) -> SchedulingResult:
        """Move an appointment to another slot of the same doctor.

        The new slot must be open. The old slot is reopened before the new
        one is closed, so rescheduling onto the current slot leaves it booked.
        """
        appointment = self.get_appointment(appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)

        doctor = appointment.doctor
        if not doctor.is_available(new_date):
            message = f"Doctor {doctor.name} is not available on {new_date}"
            logger.info(message)
            return SchedulingResult(
                status=OperationStatus.DOCTOR_UNAVAILABLE, message=message, appointment=appointment
            )

        doctor.set_availability(appointment.appointment_date, True)
        appointment.reschedule(new_date)
        doctor.set_availability(new_date, False)

        self._notify_patient(
            appointment,
            "Appointment Rescheduled",
            f"Your appointment with Dr. {doctor.name} has been rescheduled to {new_date}",
        )
        return SchedulingResult(
            status=OperationStatus.SUCCESS,
            message=f"Appointment {appointment_id} rescheduled to {new_date}",
            appointment=appointment,
        )

    def confirm_appointment(self, appointment_id: int) -> SchedulingResult:
        appointment = self.get_appointment(appointment_id)
        if appointment is None:
            return self._not_found(appointment_id)

        appointment.confirm()
        return SchedulingResult(
            status=OperationStatus.SUCCESS,
            message=f"Appointment {appointment_id} confirmed",
            appointment=appointment,
        )

    def send_reminders(self, now: Optional[datetime] = None) -> List[Appointment]:
        """Notify patients whose appointment starts within the reminder window.

        The check is ``hours_until <= REMINDER_WINDOW_HOURS``, so appointments
        already in the past are reminded as well. Nothing is recorded, so
        calling this again sends the same reminders again.
        """
        now = now or datetime.now()
        window_hours = settings.REMINDER_WINDOW_HOURS
        reminded = []

        for appointment in self._appointments:
            hours_until = _hours_between(now, appointment.appointment_date)
            if hours_until > window_hours:
                continue

            appointment.send_reminder()
            doctor_name = appointment.doctor.name
            slot = appointment.appointment_date
            self._notify_patient(
                appointment,
                "Appointment Reminder",
                f"This is a reminder for your appointment with Dr. {doctor_name} on {slot}",
                sms_body=f"Reminder: Appointment with Dr. {doctor_name} on {slot}",
            )
            reminded.append(appointment)

        return reminded

    def list_appointments(self) -> List[Appointment]:
        logger.info("Current Appointments:")
        for appointment in self._appointments:
            logger.info(appointment.summary())
        return list(self._appointments)

    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        index = self._find_index(appointment_id)
        return self._appointments[index] if index is not None else None

    def search_appointments(
        self,
        patient_name: Optional[str] = None,
        doctor_name: Optional[str] = None,
        appointment_date: Optional[Union[date, datetime]] = None,
    ) -> List[Appointment]:
        """Find appointments matching every filter given.

        Names match case-insensitively and exactly. The date filter compares
        calendar dates only. With no filters every appointment is returned.
        """
        filters: List[AppointmentFilter] = []

        if patient_name:
            filters.append(_name_filter(lambda a: a.patient.name, patient_name))

        if doctor_name:
            filters.append(_name_filter(lambda a: a.doctor.name, doctor_name))

        if appointment_date is not None:
            filters.append(_date_filter(appointment_date))

        results = [a for a in self._appointments if all(f(a) for f in filters)]

        if results:
            logger.info("Search Results:")
            for appointment in results:
                logger.info(appointment.summary())
        else:
            logger.info("No appointments found matching the criteria.")

        return results

    def _find_index(self, appointment_id: int) -> Optional[int]:
        for index, appointment in enumerate(self._appointments):
            if appointment.appointment_id == appointment_id:
                return index
        return None

    def _not_found(self, appointment_id: int) -> SchedulingResult:
        message = f"Appointment {appointment_id} not found."
        logger.info(message)
        return SchedulingResult(status=OperationStatus.NOT_FOUND, message=message)

    def _notify_patient(self, appointment: Appointment, subject: str, body: str, sms_body: str = None):
        """Send the same notice by e-mail and SMS."""
        patient = appointment.patient
        self.notification_service.send_email(patient.email, subject, body)
        self.notification_service.send_sms(patient.phone_number, sms_body or body)

def _name_filter(get_name: Callable[[Appointment], str], name: str) -> AppointmentFilter:
    wanted = name.casefold()
    return lambda appointment: get_name(appointment).casefold() == wanted

def _date_filter(value: Union[date, datetime]) -> AppointmentFilter:
    wanted = value.date() if isinstance(value, datetime) else value
    return lambda appointment: appointment.appointment_date.date() == wanted

def _hours_between(start: datetime, end: datetime) -> float:
    # Naive datetimes are local time
    if start.tzinfo is None and end.tzinfo is not None:
        start = start.astimezone(end.tzinfo)
    elif start.tzinfo is not None and end.tzinfo is None:
        start = start.astimezone().replace(tzinfo=None)
    return (end - start).total_seconds() / 3600
