"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every business-rule violation is raised as one of these types so callers
(HTTP controllers, CLI, tests) can tell failures apart without parsing
messages.
"""

from typing import Optional


class ClinicError(Exception):
    """Base class for all clinic domain errors."""

    error_code = "clinic_error"
    default_message = "Clinic operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ClinicError, ValueError):
    """Raised when a request DTO carries invalid data."""

    error_code = "validation_error"
    default_message = "Invalid request data"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ClinicError):
    error_code = "not_found"
    default_message = "Resource not found"


class AlreadyExistError(ClinicError):
    error_code = "already_exists"
    default_message = "Resource already exists"


class StoreConflictError(ClinicError):
    """
    Raised by the unit of work when the store rejects a commit because of an
    integrity constraint (unique key, foreign key).
    """

    error_code = "store_conflict"
    default_message = "The store rejected the change because of a conflict"

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"

    def __init__(self, message: Optional[str] = None, constraint: str = UNIQUE):
        super().__init__(message)
        self.constraint = constraint

    @property
    def is_foreign_key(self) -> bool:
        return self.constraint == self.FOREIGN_KEY


class DoctorAlreadyExistError(AlreadyExistError):
    error_code = "doctor_already_exists"
    default_message = "A doctor with this national code already exists"


class DoctorNotFoundError(NotFoundError):
    error_code = "doctor_not_found"
    default_message = "Doctor not found"


class PatientAlreadyExistError(AlreadyExistError):
    error_code = "patient_already_exists"
    default_message = "A patient with this national code already exists"


class PatientNotFoundError(NotFoundError):
    error_code = "patient_not_found"
    default_message = "Patient not found"


class AppointmentAlreadyExistError(AlreadyExistError):
    error_code = "appointment_already_exists"
    default_message = (
        "An appointment for this doctor and patient already exists on that day"
    )


class AppointmentNotFoundError(NotFoundError):
    error_code = "appointment_not_found"
    default_message = "Appointment not found"


class AppointmentCountIsFullError(ClinicError):
    """Raised when a doctor has no capacity left on the requested day."""

    error_code = "appointment_count_is_full"
    default_message = "The doctor has no free appointments left on that day"
