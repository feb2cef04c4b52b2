"""
Sample clinic scenario.

Seeds two patients, two doctors and two appointments, then walks through
listing, reminders, rescheduling and cancellation. Run it with
``python -m docappoint.demo``.
"""
from datetime import datetime, timedelta
from typing import Optional
import logging

from .core.config import settings
from .core.security import UserRole
from .models.appointment import Appointment
from .models.doctor import Doctor
from .models.patient import Patient
from .services.appointment_service import AppointmentManager
from .services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("admin", "adminpass", UserRole.ADMIN),
    ("drsmith", "docpass", UserRole.DOCTOR),
    ("john", "patientpass", UserRole.PATIENT),
]

def seed_demo_data(
    manager: AppointmentManager,
    auth_service: AuthService,
    now: Optional[datetime] = None,
) -> None:
    """Load the sample users, patients, doctors and appointments."""
    now = now or datetime.now()

    for username, password, role in DEMO_USERS:
        if auth_service.get_user(username) is None:
            auth_service.register_user(username, password, role)

    patient1 = manager.add_patient(Patient(patient_id=1, name="John Doe", email="john@example.com", phone_number="1234567890"))
    patient2 = manager.add_patient(Patient(patient_id=2, name="Jane Doe", email="jane@example.com", phone_number="0987654321"))

    doctor1 = Doctor(doctor_id=1, name="Dr. Smith", specialty="Cardiology")
    doctor2 = Doctor(doctor_id=2, name="Dr. Adams", specialty="Dermatology")
    doctor1.set_availability(now + timedelta(hours=48), True)
    doctor1.set_availability(now + timedelta(hours=72), True)
    doctor2.set_availability(now + timedelta(hours=24), True)
    manager.add_doctor(doctor1)
    manager.add_doctor(doctor2)

    manager.schedule_appointment(Appointment(appointment_id=1, patient=patient1, doctor=doctor1, appointment_date=now + timedelta(hours=48)))
    manager.schedule_appointment(Appointment(appointment_id=2, patient=patient2, doctor=doctor2, appointment_date=now + timedelta(hours=24)))

    patient1.add_to_medical_history(f"Check-up on {now + timedelta(hours=48)}")

def run_demo(now: Optional[datetime] = None) -> AppointmentManager:
    """Replay the sample scenario end to end and return the manager."""
    now = now or datetime.now()
    manager = AppointmentManager()
    auth_service = AuthService()

    seed_demo_data(manager, auth_service, now=now)

    admin = auth_service.authenticate("admin", "adminpass")
    if admin is None:
        logger.error("Demo admin could not log in")
        return manager
    admin.access_control()

    manager.get_patient(1).show_medical_history()
    manager.list_appointments()

    manager.send_reminders(now=now)

    manager.reschedule_appointment(1, now + timedelta(hours=72))
    manager.list_appointments()

    manager.cancel_appointment(2)
    manager.list_appointments()

    for username, password in (("drsmith", "docpass"), ("john", "patientpass")):
        user = auth_service.authenticate(username, password)
        if user:
            user.access_control()

    return manager

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    run_demo()
