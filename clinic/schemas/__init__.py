"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the service contracts
and the explicit mappers that build them.
"""

from .dtos import (
    AddAppointmentDto,
    AddDoctorDto,
    AddPatientDto,
    AppointmentDoctorDto,
    AppointmentPatientDto,
    ErrorResponse,
    GetAppointmentDto,
    GetDoctorDto,
    GetPatientDto,
    UpdateAppointmentDto,
    UpdateDoctorDto,
    UpdatePatientDto,
)

__all__ = [
    # Doctor DTOs
    "AddDoctorDto",
    "UpdateDoctorDto",
    "GetDoctorDto",
    # Patient DTOs
    "AddPatientDto",
    "UpdatePatientDto",
    "GetPatientDto",
    # Appointment DTOs
    "AddAppointmentDto",
    "UpdateAppointmentDto",
    "GetAppointmentDto",
    "AppointmentDoctorDto",
    "AppointmentPatientDto",
    # Common DTOs
    "ErrorResponse",
]
