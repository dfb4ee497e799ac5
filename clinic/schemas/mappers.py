"""
Explicit mapping functions between domain entities, ORM rows and DTOs.

Every function lists its fields exhaustively so a new column cannot leak
into (or silently drop out of) a DTO. None of them touch the store.
"""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any, Dict

from clinic.domain.entities import Appointment, Doctor, Patient
from clinic.schemas.dtos import (
    AddAppointmentDto,
    AddDoctorDto,
    AddPatientDto,
    AppointmentDoctorDto,
    AppointmentPatientDto,
    GetAppointmentDto,
    GetDoctorDto,
    GetPatientDto,
    UpdateAppointmentDto,
    UpdateDoctorDto,
    UpdatePatientDto,
)

# ------------------- ENTITY -> DTO -------------------


def doctor_to_dto(doctor) -> GetDoctorDto:
    """Project a doctor (domain entity or ORM row) to its read DTO."""
    return GetDoctorDto(
        id=doctor.id,
        first_name=doctor.first_name,
        last_name=doctor.last_name,
        national_code=doctor.national_code,
        field=doctor.field,
    )


def patient_to_dto(patient) -> GetPatientDto:
    """Project a patient (domain entity or ORM row) to its read DTO."""
    return GetPatientDto(
        id=patient.id,
        first_name=patient.first_name,
        last_name=patient.last_name,
        national_code=patient.national_code,
    )


def appointment_to_dto(appointment, doctor, patient) -> GetAppointmentDto:
    """Project an appointment and its joined doctor/patient to the read DTO."""
    return GetAppointmentDto(
        id=appointment.id,
        date=appointment.date,
        doctor_id=appointment.doctor_id,
        patient_id=appointment.patient_id,
        doctor=AppointmentDoctorDto(
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            national_code=doctor.national_code,
            field=doctor.field,
        ),
        patient=AppointmentPatientDto(
            first_name=patient.first_name,
            last_name=patient.last_name,
            national_code=patient.national_code,
        ),
    )


# ------------------- DTO -> ENTITY -------------------


def doctor_from_add_dto(dto: AddDoctorDto) -> Doctor:
    return Doctor(
        first_name=dto.first_name,
        last_name=dto.last_name,
        national_code=dto.national_code,
        field=dto.field,
    )


def patient_from_add_dto(dto: AddPatientDto) -> Patient:
    return Patient(
        first_name=dto.first_name,
        last_name=dto.last_name,
        national_code=dto.national_code,
    )


def appointment_from_add_dto(dto: AddAppointmentDto) -> Appointment:
    return Appointment(
        date=dto.date,
        doctor_id=dto.doctor_id,
        patient_id=dto.patient_id,
    )


def apply_doctor_update(doctor: Doctor, dto: UpdateDoctorDto) -> Doctor:
    """Overwrite every mutable doctor field from the update DTO."""
    doctor.first_name = dto.first_name
    doctor.last_name = dto.last_name
    doctor.national_code = dto.national_code
    doctor.field = dto.field
    return doctor


def apply_patient_update(patient: Patient, dto: UpdatePatientDto) -> Patient:
    """Overwrite every mutable patient field from the update DTO."""
    patient.first_name = dto.first_name
    patient.last_name = dto.last_name
    patient.national_code = dto.national_code
    return patient


def apply_appointment_update(
    appointment: Appointment, dto: UpdateAppointmentDto
) -> Appointment:
    """Overwrite doctor, patient and date from the update DTO."""
    appointment.doctor_id = dto.doctor_id
    appointment.patient_id = dto.patient_id
    appointment.date = dto.date
    return appointment


# ------------------- ORM -> ENTITY -------------------


def doctor_from_row(row) -> Doctor:
    return Doctor(
        id=row.id,
        national_code=row.national_code,
        first_name=row.first_name,
        last_name=row.last_name,
        field=row.field,
        created_at=getattr(row, "created_at", None),
        updated_at=getattr(row, "updated_at", None),
    )


def patient_from_row(row) -> Patient:
    return Patient(
        id=row.id,
        national_code=row.national_code,
        first_name=row.first_name,
        last_name=row.last_name,
        created_at=getattr(row, "created_at", None),
        updated_at=getattr(row, "updated_at", None),
    )


def appointment_from_row(row) -> Appointment:
    return Appointment(
        id=row.id,
        date=row.date,
        doctor_id=row.doctor_id,
        patient_id=row.patient_id,
        created_at=getattr(row, "created_at", None),
        updated_at=getattr(row, "updated_at", None),
    )


# ------------------- SERIALIZATION -------------------


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def to_dict(dto) -> Dict[str, Any]:
    """Convert a DTO (nested DTOs included) into a JSON-ready dict."""
    if not is_dataclass(dto):
        raise TypeError(f"Expected a DTO dataclass, got {type(dto).__name__}")
    return _jsonable(asdict(dto))
