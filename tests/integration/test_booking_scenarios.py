"""
End-to-end booking scenarios through the real services and SQLite store.
"""

from datetime import datetime, timedelta, timezone

import pytest

from clinic.core.exceptions import (
    AppointmentAlreadyExistError,
    AppointmentCountIsFullError,
    AppointmentNotFoundError,
    DoctorAlreadyExistError,
    DoctorNotFoundError,
    PatientAlreadyExistError,
    PatientNotFoundError,
)
from clinic.schemas.dtos import AddAppointmentDto, UpdateAppointmentDto
from tests.factories.test_factories import (
    DoctorFactory,
    PatientFactory,
    patient_national_code,
)

APRIL_28 = datetime(2022, 4, 28)


@pytest.fixture
def doctor(doctor_service):
    return doctor_service.add(DoctorFactory.create_add_dto(national_code="2380132933"))


@pytest.fixture
def patient(patient_service):
    return patient_service.add(
        PatientFactory.create_add_dto(national_code="2380257515")
    )


@pytest.mark.integration
@pytest.mark.appointment
class TestBookingScenarios:
    def test_book_then_duplicate_on_same_day(
        self, appointment_service, doctor, patient
    ):
        created = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28)
        )

        assert created.id is not None
        assert created.doctor.national_code == "2380132933"
        assert created.patient.national_code == "2380257515"

        with pytest.raises(AppointmentAlreadyExistError):
            appointment_service.add(
                AddAppointmentDto(doctor.id, patient.id, APRIL_28 + timedelta(hours=5))
            )

        assert len(appointment_service.get_all()) == 1

    def test_sixth_appointment_of_the_day_is_rejected(
        self, appointment_service, patient_service, doctor
    ):
        patients = [
            patient_service.add(
                PatientFactory.create_add_dto(national_code=patient_national_code(i))
            )
            for i in range(6)
        ]

        for hour, booked_patient in enumerate(patients[:5], start=9):
            appointment_service.add(
                AddAppointmentDto(
                    doctor.id, booked_patient.id, APRIL_28.replace(hour=hour)
                )
            )

        with pytest.raises(AppointmentCountIsFullError):
            appointment_service.add(
                AddAppointmentDto(doctor.id, patients[5].id, APRIL_28.replace(hour=15))
            )

        # The next day has capacity again
        appointment_service.add(
            AddAppointmentDto(doctor.id, patients[5].id, APRIL_28 + timedelta(days=1))
        )
        assert len(appointment_service.get_all()) == 6

    def test_booking_with_unknown_doctor(self, appointment_service, patient):
        with pytest.raises(DoctorNotFoundError):
            appointment_service.add(AddAppointmentDto(77, patient.id, APRIL_28))

    def test_failed_booking_leaves_session_usable(
        self, appointment_service, doctor, patient
    ):
        appointment_service.add(AddAppointmentDto(doctor.id, patient.id, APRIL_28))
        with pytest.raises(AppointmentAlreadyExistError):
            appointment_service.add(AddAppointmentDto(doctor.id, patient.id, APRIL_28))

        moved = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28 + timedelta(days=2))
        )
        assert moved.date == APRIL_28 + timedelta(days=2)

    def test_move_appointment_onto_existing_slot(
        self, appointment_service, doctor, patient
    ):
        appointment_service.add(AddAppointmentDto(doctor.id, patient.id, APRIL_28))
        later = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28 + timedelta(days=1))
        )

        with pytest.raises(AppointmentAlreadyExistError):
            appointment_service.update(
                later.id, UpdateAppointmentDto(doctor.id, patient.id, APRIL_28)
            )

    def test_delete_doctor_cascades_appointments(
        self, appointment_service, doctor_service, doctor, patient
    ):
        appointment_service.add(AddAppointmentDto(doctor.id, patient.id, APRIL_28))

        doctor_service.delete(doctor.id)

        assert appointment_service.get_all() == []


@pytest.mark.integration
class TestRegistrationScenarios:
    def test_duplicate_doctor_national_code(self, doctor_service, doctor):
        with pytest.raises(DoctorAlreadyExistError):
            doctor_service.add(DoctorFactory.create_add_dto(first_name="Other"))

        doctors = doctor_service.get_all()
        assert [d.id for d in doctors] == [doctor.id]
        assert doctors[0].first_name == doctor.first_name

    def test_duplicate_patient_national_code(self, patient_service, patient):
        with pytest.raises(PatientAlreadyExistError):
            patient_service.add(PatientFactory.create_add_dto(first_name="Other"))

        assert [p.id for p in patient_service.get_all()] == [patient.id]

    def test_same_code_allowed_across_doctor_and_patient(
        self, patient_service, doctor
    ):
        patient = patient_service.add(
            PatientFactory.create_add_dto(national_code=doctor.national_code)
        )

        assert patient.national_code == doctor.national_code

    def test_update_patient_to_taken_code(self, patient_service, patient):
        other = patient_service.add(PatientFactory.create_add_dto(national_code="11"))

        with pytest.raises(PatientAlreadyExistError):
            patient_service.update(
                other.id, PatientFactory.create_update_dto(national_code="2380257515")
            )

        assert patient_service.get_by_dto(other.id).national_code == "11"
        assert len(patient_service.get_all()) == 2


@pytest.mark.integration
class TestDeleteScenarios:
    def test_delete_one_of_two_doctors(self, doctor_service, doctor):
        other = doctor_service.add(
            DoctorFactory.create_add_dto(national_code="1111111111")
        )

        doctor_service.delete(doctor.id)

        assert [d.id for d in doctor_service.get_all()] == [other.id]
        assert doctor_service.get_by_dto(doctor.id) is None
        with pytest.raises(DoctorNotFoundError):
            doctor_service.delete(doctor.id)

    def test_delete_one_of_two_patients(self, patient_service, patient):
        other = patient_service.add(
            PatientFactory.create_add_dto(national_code="1111111111")
        )

        patient_service.delete(patient.id)

        assert [p.id for p in patient_service.get_all()] == [other.id]
        with pytest.raises(PatientNotFoundError):
            patient_service.delete(patient.id)

    def test_delete_one_of_two_appointments(
        self, appointment_service, doctor, patient
    ):
        first = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28)
        )
        second = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28 + timedelta(days=1))
        )

        appointment_service.delete(first.id)

        assert [a.id for a in appointment_service.get_all()] == [second.id]
        with pytest.raises(AppointmentNotFoundError):
            appointment_service.delete(first.id)

    def test_delete_patient_keeps_other_patients_appointments(
        self, appointment_service, patient_service, doctor, patient
    ):
        other = patient_service.add(
            PatientFactory.create_add_dto(national_code="1111111111")
        )
        appointment_service.add(AddAppointmentDto(doctor.id, patient.id, APRIL_28))
        kept = appointment_service.add(
            AddAppointmentDto(doctor.id, other.id, APRIL_28)
        )

        patient_service.delete(patient.id)

        assert [a.id for a in appointment_service.get_all()] == [kept.id]


@pytest.mark.integration
@pytest.mark.appointment
class TestTimezoneScenarios:
    def test_offset_dates_are_stored_in_utc(self, appointment_service, doctor, patient):
        plus_three = timezone(timedelta(hours=3))

        created = appointment_service.add(
            AddAppointmentDto(
                doctor.id, patient.id, datetime(2022, 4, 28, 12, 0, tzinfo=plus_three)
            )
        )

        assert created.date == datetime(2022, 4, 28, 9, 0)
        assert appointment_service.get_all()[0].date == datetime(2022, 4, 28, 9, 0)

    def test_offset_that_crosses_midnight_counts_for_utc_day(
        self, appointment_service, doctor, patient
    ):
        plus_three = timezone(timedelta(hours=3))
        # 01:00 at +03:00 is 22:00 UTC on April 27
        appointment_service.add(
            AddAppointmentDto(
                doctor.id, patient.id, datetime(2022, 4, 28, 1, 0, tzinfo=plus_three)
            )
        )

        with pytest.raises(AppointmentAlreadyExistError):
            appointment_service.add(
                AddAppointmentDto(doctor.id, patient.id, datetime(2022, 4, 27, 8, 0))
            )

        booked = appointment_service.add(
            AddAppointmentDto(doctor.id, patient.id, APRIL_28.replace(hour=9))
        )
        assert booked.date == datetime(2022, 4, 28, 9, 0)
