# Services package initialization
# Application services holding the business rules

from . import appointment_service
from . import doctor_service
from . import patient_service

__all__ = [
    "appointment_service",
    "doctor_service",
    "patient_service",
]
