"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Request DTOs normalize their own fields in validate() (strip strings,
promote a bare date to midnight, convert aware datetimes to naive UTC)
and raise ValidationError on bad input.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from clinic.core.exceptions import ValidationError
from clinic.db.base import (
    FIELD_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NATIONAL_CODE_MAX_LENGTH,
)


def _clean_text(value: Any, field: str, max_length: int) -> str:
    if value is None or not isinstance(value, str):
        raise ValidationError(f"{field} is required", field=field)
    value = value.strip()
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    if len(value) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters", field=field
        )
    return value


def _clean_id(value: Any, field: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Valid {field} is required", field=field)
    return value


def _clean_date(value: Any, field: str = "date") -> datetime:
    if isinstance(value, datetime):
        # Aware datetimes are stored as naive UTC
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValidationError(f"{field} must be a date or datetime", field=field)


# ------------------- DOCTOR -------------------


@dataclass
class AddDoctorDto:
    """DTO for doctor creation requests."""

    first_name: str
    last_name: str
    national_code: str
    field: str

    def validate(self) -> None:
        """Validate the request data."""
        self.first_name = _clean_text(self.first_name, "first_name", NAME_MAX_LENGTH)
        self.last_name = _clean_text(self.last_name, "last_name", NAME_MAX_LENGTH)
        self.national_code = _clean_text(
            self.national_code, "national_code", NATIONAL_CODE_MAX_LENGTH
        )
        self.field = _clean_text(self.field, "field", FIELD_MAX_LENGTH)


@dataclass
class UpdateDoctorDto(AddDoctorDto):
    """DTO for doctor update requests; every mutable field is overwritten."""

    pass


@dataclass
class GetDoctorDto:
    """DTO for doctor read responses."""

    id: int
    first_name: str
    last_name: str
    national_code: str
    field: str


# ------------------- PATIENT -------------------


@dataclass
class AddPatientDto:
    """DTO for patient creation requests."""

    first_name: str
    last_name: str
    national_code: str

    def validate(self) -> None:
        """Validate the request data."""
        self.first_name = _clean_text(self.first_name, "first_name", NAME_MAX_LENGTH)
        self.last_name = _clean_text(self.last_name, "last_name", NAME_MAX_LENGTH)
        self.national_code = _clean_text(
            self.national_code, "national_code", NATIONAL_CODE_MAX_LENGTH
        )


@dataclass
class UpdatePatientDto(AddPatientDto):
    """DTO for patient update requests."""

    pass


@dataclass
class GetPatientDto:
    """DTO for patient read responses."""

    id: int
    first_name: str
    last_name: str
    national_code: str


# ------------------- APPOINTMENT -------------------


@dataclass
class AddAppointmentDto:
    """DTO for appointment booking requests."""

    doctor_id: int
    patient_id: int
    date: datetime

    def validate(self) -> None:
        """Validate the request data."""
        self.doctor_id = _clean_id(self.doctor_id, "doctor_id")
        self.patient_id = _clean_id(self.patient_id, "patient_id")
        self.date = _clean_date(self.date)


@dataclass
class UpdateAppointmentDto(AddAppointmentDto):
    """DTO for appointment update requests."""

    pass


@dataclass
class AppointmentDoctorDto:
    """Doctor summary embedded in an appointment."""

    first_name: str
    last_name: str
    national_code: str
    field: str


@dataclass
class AppointmentPatientDto:
    """Patient summary embedded in an appointment."""

    first_name: str
    last_name: str
    national_code: str


@dataclass
class GetAppointmentDto:
    """DTO for appointment read responses."""

    id: int
    date: datetime
    doctor_id: int
    patient_id: int
    doctor: AppointmentDoctorDto
    patient: AppointmentPatientDto


# ------------------- COMMON -------------------


@dataclass
class ErrorResponse:
    """DTO for error responses."""

    error: str
    message: str
    field: Optional[str] = None

    @classmethod
    def from_exception(cls, exc) -> "ErrorResponse":
        """Create error response from a ClinicError."""
        return cls(
            error=exc.error_code,
            message=exc.message,
            field=getattr(exc, "field", None),
        )
