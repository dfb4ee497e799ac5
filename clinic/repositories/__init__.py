from .appointment_repo import AppointmentRepository
from .doctor_repo import DoctorRepository
from .patient_repo import PatientRepository
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "AppointmentRepository",
    "DoctorRepository",
    "PatientRepository",
    "SqlAlchemyUnitOfWork",
]
