import logging
import pytest
from datetime import date, datetime, timedelta

from docappoint.core.config import settings
from docappoint.models.appointment import Appointment
from docappoint.models.doctor import Doctor
from docappoint.models.patient import Patient
from docappoint.schemas.scheduling import OperationStatus
from docappoint.services.appointment_service import AppointmentManager
from docappoint.services.notification_service import NotificationService

NOW = datetime(2030, 5, 1, 8, 0)
T1 = datetime(2030, 5, 3, 9, 0)
T2 = datetime(2030, 5, 4, 14, 30)

class RecordingNotificationService(NotificationService):
    """Keeps every notification instead of logging it."""

    def __init__(self):
        super().__init__()
        self.emails = []
        self.sms = []

    def send_email(self, to, subject, body):
        self.emails.append((to, subject, body))

    def send_sms(self, phone_number, message):
        self.sms.append((phone_number, message))

@pytest.fixture
def notifier():
    return RecordingNotificationService()

@pytest.fixture
def manager(notifier):
    return AppointmentManager(notification_service=notifier)

@pytest.fixture
def patient1(manager):
    return manager.add_patient(Patient(patient_id=1, name="John Doe", email="john@example.com", phone_number="1234567890"))

@pytest.fixture
def patient2(manager):
    return manager.add_patient(Patient(patient_id=2, name="Jane Doe", email="jane@example.com", phone_number="0987654321"))

@pytest.fixture
def doctor(manager):
    doctor = Doctor(doctor_id=1, name="Dr. Smith", specialty="Cardiology")
    doctor.set_availability(T1, True)
    doctor.set_availability(T2, True)
    return manager.add_doctor(doctor)

def make_appointment(appointment_id, patient, doctor, when):
    return Appointment(appointment_id=appointment_id, patient=patient, doctor=doctor, appointment_date=when)

class TestRegistry:

    def test_add_and_list_in_insertion_order(self, manager, patient1, patient2, doctor):
        assert manager.list_patients() == [patient1, patient2]
        assert manager.list_doctors() == [doctor]

    def test_get_by_id(self, manager, patient1, doctor):
        assert manager.get_patient(1) is patient1
        assert manager.get_doctor(1) is doctor
        assert manager.get_patient(99) is None
        assert manager.get_doctor(99) is None

    def test_listing_returns_copy(self, manager, patient1):
        manager.list_patients().clear()
        assert manager.list_patients() == [patient1]

    def test_add_none_fails_fast(self, manager):
        with pytest.raises(ValueError):
            manager.add_patient(None)
        with pytest.raises(ValueError):
            manager.add_doctor(None)

class TestScheduleAppointment:

    def test_books_open_slot(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)

        result = manager.schedule_appointment(appointment)

        assert result.ok
        assert result.status == OperationStatus.SUCCESS
        assert result.appointment is appointment
        assert manager.list_appointments() == [appointment]
        assert doctor.is_available(T1) is False
        assert doctor.is_available(T2) is True

    def test_does_not_confirm(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)
        assert appointment.is_confirmed is False

    def test_notifies_patient(self, manager, notifier, patient1, doctor):
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))

        assert len(notifier.emails) == 1
        to, subject, body = notifier.emails[0]
        assert to == "john@example.com"
        assert subject == "Appointment Confirmation"
        assert "Dr. Smith" in body
        assert notifier.sms[0][0] == "1234567890"

    def test_rejects_unset_slot(self, manager, notifier, patient1, doctor):
        never_opened = T1 + timedelta(hours=1)

        result = manager.schedule_appointment(make_appointment(1, patient1, doctor, never_opened))

        assert result.status == OperationStatus.DOCTOR_UNAVAILABLE
        assert "not available" in result.message
        assert manager.list_appointments() == []
        assert never_opened not in doctor.availability
        assert notifier.emails == []

    def test_second_booking_of_same_slot_fails(self, manager, patient1, patient2, doctor):
        first = manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))
        second = manager.schedule_appointment(make_appointment(2, patient2, doctor, T1))

        assert first.ok
        assert second.status == OperationStatus.DOCTOR_UNAVAILABLE
        assert len(manager.list_appointments()) == 1
        assert manager.list_appointments()[0].appointment_id == 1

    def test_none_appointment_fails_fast(self, manager):
        with pytest.raises(ValueError):
            manager.schedule_appointment(None)

class TestCancelAppointment:

    def test_cancel_removes_and_frees_slot(self, manager, notifier, patient1, doctor):
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))

        result = manager.cancel_appointment(1)

        assert result.ok
        assert manager.list_appointments() == []
        assert manager.get_appointment(1) is None
        assert doctor.is_available(T1) is True
        assert notifier.emails[-1][1] == "Appointment Cancellation"

    def test_cancel_unknown_changes_nothing(self, manager, notifier, patient1, doctor):
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))
        sent = len(notifier.emails)

        result = manager.cancel_appointment(42)

        assert result.status == OperationStatus.NOT_FOUND
        assert result.message == "Appointment 42 not found."
        assert len(manager.list_appointments()) == 1
        assert doctor.is_available(T1) is False
        assert len(notifier.emails) == sent

    def test_cancelled_slot_can_be_rebooked(self, manager, patient1, patient2, doctor):
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))
        manager.cancel_appointment(1)

        result = manager.schedule_appointment(make_appointment(2, patient2, doctor, T1))

        assert result.ok
        assert [a.appointment_id for a in manager.list_appointments()] == [2]

class TestRescheduleAppointment:

    def test_moves_to_open_slot(self, manager, notifier, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)

        result = manager.reschedule_appointment(1, T2)

        assert result.ok
        assert appointment.appointment_date == T2
        assert doctor.is_available(T1) is True
        assert doctor.is_available(T2) is False
        assert notifier.emails[-1][1] == "Appointment Rescheduled"

    def test_unavailable_slot_leaves_state_unchanged(self, manager, patient1, patient2, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)
        manager.schedule_appointment(make_appointment(2, patient2, doctor, T2))

        result = manager.reschedule_appointment(1, T2)

        assert result.status == OperationStatus.DOCTOR_UNAVAILABLE
        assert appointment.appointment_date == T1
        assert doctor.is_available(T1) is False
        assert doctor.is_available(T2) is False

    def test_never_opened_slot_is_rejected(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)
        unknown = T2 + timedelta(days=3)

        result = manager.reschedule_appointment(1, unknown)

        assert result.status == OperationStatus.DOCTOR_UNAVAILABLE
        assert appointment.appointment_date == T1
        assert unknown not in doctor.availability

    def test_unknown_appointment(self, manager, doctor):
        result = manager.reschedule_appointment(7, T2)

        assert result.status == OperationStatus.NOT_FOUND
        assert doctor.is_available(T2) is True

    def test_same_slot_stays_booked(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)
        # Reopened outside the manager, so the availability check passes
        doctor.set_availability(T1, True)

        result = manager.reschedule_appointment(1, T1)

        assert result.ok
        assert appointment.appointment_date == T1
        assert doctor.is_available(T1) is False

    def test_keeps_confirmation(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)
        manager.confirm_appointment(1)

        manager.reschedule_appointment(1, T2)

        assert appointment.is_confirmed is True

class TestConfirmAppointment:

    def test_confirm(self, manager, patient1, doctor):
        appointment = make_appointment(1, patient1, doctor, T1)
        manager.schedule_appointment(appointment)

        result = manager.confirm_appointment(1)

        assert result.ok
        assert appointment.is_confirmed is True

    def test_confirm_unknown(self, manager):
        assert manager.confirm_appointment(3).status == OperationStatus.NOT_FOUND

class TestSendReminders:

    def test_includes_appointment_within_window(self, manager, notifier, patient1, doctor):
        soon = NOW + timedelta(hours=3)
        doctor.set_availability(soon, True)
        appointment = make_appointment(1, patient1, doctor, soon)
        manager.schedule_appointment(appointment)
        notifier.emails.clear()
        notifier.sms.clear()

        reminded = manager.send_reminders(now=NOW)

        assert reminded == [appointment]
        assert notifier.emails == [(
            "john@example.com",
            "Appointment Reminder",
            f"This is a reminder for your appointment with Dr. Dr. Smith on {soon}",
        )]
        assert notifier.sms == [("1234567890", f"Reminder: Appointment with Dr. Dr. Smith on {soon}")]

    def test_window_boundary_is_inclusive(self, manager, patient1, patient2, doctor):
        boundary = NOW + timedelta(hours=24)
        beyond = boundary + timedelta(seconds=1)
        doctor.set_availability(boundary, True)
        doctor.set_availability(beyond, True)
        manager.schedule_appointment(make_appointment(1, patient1, doctor, boundary))
        manager.schedule_appointment(make_appointment(2, patient2, doctor, beyond))

        reminded = manager.send_reminders(now=NOW)

        assert [a.appointment_id for a in reminded] == [1]

    def test_includes_past_appointments(self, manager, patient1, doctor):
        past = NOW - timedelta(days=2)
        doctor.set_availability(past, True)
        manager.schedule_appointment(make_appointment(1, patient1, doctor, past))

        assert [a.appointment_id for a in manager.send_reminders(now=NOW)] == [1]

    def test_repeats_and_does_not_mutate(self, manager, notifier, patient1, doctor):
        soon = NOW + timedelta(hours=1)
        doctor.set_availability(soon, True)
        appointment = make_appointment(1, patient1, doctor, soon)
        manager.schedule_appointment(appointment)
        notifier.emails.clear()

        manager.send_reminders(now=NOW)
        manager.send_reminders(now=NOW)

        assert len(notifier.emails) == 2
        assert appointment.is_confirmed is False
        assert manager.list_appointments() == [appointment]

    def test_window_from_settings(self, manager, patient1, doctor, monkeypatch):
        monkeypatch.setattr(settings, "REMINDER_WINDOW_HOURS", 72)
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))

        assert len(manager.send_reminders(now=NOW)) == 1

    def test_far_appointments_skipped(self, manager, notifier, patient1, doctor):
        manager.schedule_appointment(make_appointment(1, patient1, doctor, T1))
        notifier.emails.clear()

        assert manager.send_reminders(now=NOW) == []
        assert notifier.emails == []

class TestSearchAppointments:

    @pytest.fixture
    def booked(self, manager, patient1, patient2, doctor):
        other = Doctor(doctor_id=2, name="Dr. Adams", specialty="Dermatology")
        late_t1 = T1.replace(hour=17)
        other.set_availability(late_t1, True)
        manager.add_doctor(other)

        a1 = make_appointment(1, patient1, doctor, T1)
        a2 = make_appointment(2, patient2, doctor, T2)
        a3 = make_appointment(3, patient1, other, late_t1)
        for appointment in (a1, a2, a3):
            manager.schedule_appointment(appointment)
        return a1, a2, a3

    def test_no_filters_returns_all_in_order(self, manager, booked):
        assert manager.search_appointments() == list(booked)

    def test_patient_name_case_insensitive(self, manager, booked):
        a1, _, a3 = booked
        assert manager.search_appointments(patient_name="john doe") == [a1, a3]

    def test_name_is_exact_not_substring(self, manager, booked):
        assert manager.search_appointments(patient_name="John") == []
        assert manager.search_appointments(doctor_name="Smith") == []

    def test_doctor_name(self, manager, booked):
        a1, a2, _ = booked
        assert manager.search_appointments(doctor_name="DR. SMITH") == [a1, a2]

    def test_date_ignores_time_of_day(self, manager, booked):
        a1, _, a3 = booked
        assert manager.search_appointments(appointment_date=T1.date()) == [a1, a3]
        assert manager.search_appointments(appointment_date=T1.replace(hour=0)) == [a1, a3]

    def test_filters_are_conjunctive(self, manager, booked):
        _, _, a3 = booked
        assert manager.search_appointments(
            patient_name="John Doe", doctor_name="Dr. Adams", appointment_date=T1
        ) == [a3]

    def test_empty_string_means_no_filter(self, manager, booked):
        assert manager.search_appointments(patient_name="", doctor_name="") == list(booked)

    def test_no_matches(self, manager, booked, caplog):
        caplog.set_level(logging.INFO)
        assert manager.search_appointments(appointment_date=date(2031, 1, 1)) == []
        assert "No appointments found matching the criteria." in caplog.text

    def test_cancelled_excluded(self, manager, booked):
        manager.cancel_appointment(2)
        assert [a.appointment_id for a in manager.search_appointments()] == [1, 3]

class TestDuplicateIds:

    def test_first_match_wins(self, manager, patient1, patient2, doctor):
        first = make_appointment(1, patient1, doctor, T1)
        second = make_appointment(1, patient2, doctor, T2)
        manager.schedule_appointment(first)
        manager.schedule_appointment(second)

        assert manager.get_appointment(1) is first

        manager.cancel_appointment(1)

        assert manager.list_appointments() == [second]
        assert doctor.is_available(T1) is True
        assert doctor.is_available(T2) is False
