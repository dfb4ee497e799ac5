"""
Appointment service following SOLID principles.
"""

import logging
from datetime import datetime
from typing import List, Optional

from clinic.core.config import DEFAULT_MAX_DAILY_APPOINTMENTS
from clinic.core.exceptions import (
    AppointmentAlreadyExistError,
    AppointmentCountIsFullError,
    AppointmentNotFoundError,
    ClinicError,
    DoctorNotFoundError,
    PatientNotFoundError,
    StoreConflictError,
)
from clinic.domain.interfaces import (
    IAppointmentRepository,
    IDoctorReader,
    IPatientReader,
    IUnitOfWork,
)
from clinic.schemas.dtos import (
    AddAppointmentDto,
    GetAppointmentDto,
    UpdateAppointmentDto,
)
from clinic.schemas.mappers import apply_appointment_update, appointment_from_add_dto

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment booking.

    Business Rules:
    - Doctor and patient must exist
    - No two appointments for the same doctor and patient on one calendar day
    - A doctor takes at most ``max_daily_appointments`` appointments per day

    The doctor row is locked before the duplicate and capacity checks so the
    checks and the insert run in one transaction per doctor.
    """

    def __init__(
        self,
        repository: IAppointmentRepository,
        doctor_repository: IDoctorReader,
        patient_repository: IPatientReader,
        unit_of_work: IUnitOfWork,
        max_daily_appointments: int = DEFAULT_MAX_DAILY_APPOINTMENTS,
    ):
        if max_daily_appointments < 1:
            raise ValueError("max_daily_appointments must be positive")
        self.repository = repository
        self.doctor_repository = doctor_repository
        self.patient_repository = patient_repository
        self.unit_of_work = unit_of_work
        self.max_daily_appointments = max_daily_appointments

    def add(self, dto: AddAppointmentDto) -> GetAppointmentDto:
        """Book an appointment.

        Raises:
            ValidationError: if the DTO is incomplete
            DoctorNotFoundError / PatientNotFoundError: unknown references
            AppointmentAlreadyExistError: same doctor, patient and day already booked
            AppointmentCountIsFullError: the doctor is fully booked that day
        """
        dto.validate()
        self._prevent_when_references_not_exist(dto.doctor_id, dto.patient_id)

        appointment = appointment_from_add_dto(dto)
        try:
            self.repository.lock_doctor(dto.doctor_id)
            self._prevent_when_appointment_exists(
                dto.doctor_id, dto.patient_id, dto.date
            )
            self._prevent_when_doctor_is_full(dto.doctor_id, dto.date)
            self.repository.add(appointment)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            self._raise_for_conflict(e, dto)
        except ClinicError:
            # Release the doctor lock before surfacing the rule violation
            self.unit_of_work.rollback()
            raise

        logger.info(
            "Appointment booked",
            extra={
                "context": {
                    "appointment_id": appointment.id,
                    "doctor_id": appointment.doctor_id,
                    "patient_id": appointment.patient_id,
                    "day": appointment.day.isoformat(),
                }
            },
        )
        return self.repository.get_by_dto(appointment.id)

    def get_all(self) -> List[GetAppointmentDto]:
        """Get all appointments with embedded doctor and patient summaries."""
        return self.repository.get_all()

    def get_appointment_by_id(self, appointment_id: int) -> Optional[GetAppointmentDto]:
        """Get one appointment with embedded doctor and patient, or None."""
        return self.repository.get_by_dto(appointment_id)

    def update(self, appointment_id: int, dto: UpdateAppointmentDto) -> None:
        """Move an appointment to another doctor, patient or date.

        Duplicate and capacity rules are re-checked against the new slot,
        ignoring the appointment being updated.
        """
        dto.validate()

        appointment = self.repository.get_by_id(appointment_id)
        self._prevent_when_appointment_not_exist(appointment, appointment_id)
        self._prevent_when_references_not_exist(dto.doctor_id, dto.patient_id)

        slot_changed = not appointment.is_same_slot(
            dto.doctor_id, dto.patient_id, dto.date
        )
        day_or_doctor_changed = (
            appointment.doctor_id != dto.doctor_id
            or appointment.day != dto.date.date()
        )

        try:
            self.repository.lock_doctor(dto.doctor_id)
            if slot_changed:
                self._prevent_when_appointment_exists(
                    dto.doctor_id, dto.patient_id, dto.date, exclude_id=appointment_id
                )
            if day_or_doctor_changed:
                self._prevent_when_doctor_is_full(
                    dto.doctor_id, dto.date, exclude_id=appointment_id
                )
            apply_appointment_update(appointment, dto)
            self.repository.update(appointment)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            self._raise_for_conflict(e, dto)
        except ClinicError:
            self.unit_of_work.rollback()
            raise

        logger.info(
            "Appointment updated",
            extra={"context": {"appointment_id": appointment_id}},
        )

    def delete(self, appointment_id: int) -> None:
        """Cancel an appointment.

        Raises:
            AppointmentNotFoundError: if no appointment has this ID
        """
        appointment = self.repository.get_by_id(appointment_id)
        self._prevent_when_appointment_not_exist(appointment, appointment_id)

        self.repository.delete(appointment)
        self.unit_of_work.commit()
        logger.info(
            "Appointment deleted",
            extra={"context": {"appointment_id": appointment_id}},
        )

    def _raise_for_conflict(self, error: StoreConflictError, dto) -> None:
        """Turn a store conflict into the matching domain error.

        A foreign key failure means the doctor or patient was deleted after
        the pre-checks ran; the unit of work has rolled back, so the
        references are looked up again.
        """
        if error.is_foreign_key:
            self._prevent_when_references_not_exist(dto.doctor_id, dto.patient_id)
            raise error
        raise AppointmentAlreadyExistError() from error

    def _prevent_when_references_not_exist(self, doctor_id: int, patient_id: int):
        if self.doctor_repository.get_by_id(doctor_id) is None:
            raise DoctorNotFoundError(f"Doctor with ID {doctor_id} not found")
        if self.patient_repository.get_by_id(patient_id) is None:
            raise PatientNotFoundError(f"Patient with ID {patient_id} not found")

    def _prevent_when_appointment_exists(
        self,
        doctor_id: int,
        patient_id: int,
        date: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        if self.repository.is_exist_appointment(
            doctor_id, patient_id, date, exclude_id=exclude_id
        ):
            logger.warning(
                "Rejected duplicate appointment",
                extra={
                    "context": {
                        "doctor_id": doctor_id,
                        "patient_id": patient_id,
                        "day": date.date().isoformat(),
                    }
                },
            )
            raise AppointmentAlreadyExistError()

    def _prevent_when_doctor_is_full(
        self, doctor_id: int, date: datetime, exclude_id: Optional[int] = None
    ) -> None:
        booked = self.repository.count_doctor_appointments_on_day(
            doctor_id, date, exclude_id=exclude_id
        )
        if booked >= self.max_daily_appointments:
            logger.warning(
                "Rejected appointment, doctor fully booked",
                extra={
                    "context": {
                        "doctor_id": doctor_id,
                        "day": date.date().isoformat(),
                        "booked": booked,
                        "limit": self.max_daily_appointments,
                    }
                },
            )
            raise AppointmentCountIsFullError()

    @staticmethod
    def _prevent_when_appointment_not_exist(appointment, appointment_id: int) -> None:
        if appointment is None:
            raise AppointmentNotFoundError(
                f"Appointment with ID {appointment_id} not found"
            )
