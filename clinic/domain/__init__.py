"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository and unit-of-work contracts
"""

from .entities import Appointment, Doctor, Patient
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IDoctorReader,
    IDoctorRepository,
    IDoctorWriter,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IUnitOfWork,
)

__all__ = [
    # Domain entities
    "Doctor",
    "Patient",
    "Appointment",
    # Repository interfaces
    "IDoctorRepository",
    "IPatientRepository",
    "IAppointmentRepository",
    "IUnitOfWork",
    # Segregated interfaces
    "IDoctorReader",
    "IDoctorWriter",
    "IPatientReader",
    "IPatientWriter",
    "IAppointmentReader",
    "IAppointmentWriter",
]
