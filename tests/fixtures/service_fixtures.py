"""
Service fixtures wired to real repositories on the test store.
"""

import pytest

from clinic.repositories.appointment_repo import AppointmentRepository
from clinic.repositories.doctor_repo import DoctorRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.unit_of_work import SqlAlchemyUnitOfWork
from clinic.services.appointment_service import AppointmentService
from clinic.services.doctor_service import DoctorService
from clinic.services.patient_service import PatientService


@pytest.fixture
def unit_of_work(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest.fixture
def doctor_repo(db_session):
    return DoctorRepository(db_session)


@pytest.fixture
def patient_repo(db_session):
    return PatientRepository(db_session)


@pytest.fixture
def appointment_repo(db_session):
    return AppointmentRepository(db_session)


@pytest.fixture
def doctor_service(doctor_repo, unit_of_work):
    return DoctorService(doctor_repo, unit_of_work)


@pytest.fixture
def patient_service(patient_repo, unit_of_work):
    return PatientService(patient_repo, unit_of_work)


@pytest.fixture
def appointment_service(appointment_repo, doctor_repo, patient_repo, unit_of_work):
    """Appointment service with the default daily capacity of 5."""
    return AppointmentService(
        appointment_repo, doctor_repo, patient_repo, unit_of_work
    )
