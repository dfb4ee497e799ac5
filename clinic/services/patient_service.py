"""
Patient service following SOLID principles.

Mirrors the doctor service: unique national code among patients, existence
checks before update and delete, one commit per successful operation.
"""

import logging
from typing import List, Optional

from clinic.core.exceptions import (
    PatientAlreadyExistError,
    PatientNotFoundError,
    StoreConflictError,
)
from clinic.domain.interfaces import IPatientRepository, IUnitOfWork
from clinic.schemas.dtos import AddPatientDto, GetPatientDto, UpdatePatientDto
from clinic.schemas.mappers import (
    apply_patient_update,
    patient_from_add_dto,
    patient_to_dto,
)

logger = logging.getLogger(__name__)


class PatientService:
    """Application service for patient-related use-cases."""

    def __init__(self, repository: IPatientRepository, unit_of_work: IUnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    def add(self, dto: AddPatientDto) -> GetPatientDto:
        """Register a new patient.

        Raises:
            ValidationError: if the DTO is incomplete
            PatientAlreadyExistError: if the national code is already registered
        """
        dto.validate()

        if self.repository.is_exist_national_code(dto.national_code):
            logger.warning(
                "Rejected duplicate patient national code",
                extra={"context": {"national_code": dto.national_code}},
            )
            raise PatientAlreadyExistError()

        patient = patient_from_add_dto(dto)
        try:
            self.repository.add(patient)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            raise PatientAlreadyExistError() from e

        logger.info("Patient added", extra={"context": {"patient_id": patient.id}})
        return patient_to_dto(patient)

    def get_all(self) -> List[GetPatientDto]:
        """Get all patients as read DTOs."""
        return self.repository.get_all()

    def get_by_dto(self, patient_id: int) -> Optional[GetPatientDto]:
        """Get one patient as a read DTO, or None if absent."""
        return self.repository.get_by_dto(patient_id)

    def update(self, patient_id: int, dto: UpdatePatientDto) -> None:
        """Overwrite a patient's fields.

        Raises:
            PatientNotFoundError: if no patient has this ID
            PatientAlreadyExistError: if the new national code belongs to another patient
        """
        dto.validate()

        patient = self.repository.get_by_id(patient_id)
        self._prevent_when_patient_not_exist(patient, patient_id)

        if patient.national_code != dto.national_code:
            if self.repository.is_exist_national_code_except_self(
                patient_id, dto.national_code
            ):
                logger.warning(
                    "Rejected patient update to a taken national code",
                    extra={
                        "context": {
                            "patient_id": patient_id,
                            "national_code": dto.national_code,
                        }
                    },
                )
                raise PatientAlreadyExistError()

        apply_patient_update(patient, dto)
        try:
            self.repository.update(patient)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            raise PatientAlreadyExistError() from e

        logger.info("Patient updated", extra={"context": {"patient_id": patient_id}})

    def delete(self, patient_id: int) -> None:
        """Remove a patient.

        Raises:
            PatientNotFoundError: if no patient has this ID
        """
        patient = self.repository.get_by_id(patient_id)
        self._prevent_when_patient_not_exist(patient, patient_id)

        self.repository.delete(patient)
        self.unit_of_work.commit()
        logger.info("Patient deleted", extra={"context": {"patient_id": patient_id}})

    @staticmethod
    def _prevent_when_patient_not_exist(patient, patient_id: int) -> None:
        if patient is None:
            logger.warning(
                "Patient not found", extra={"context": {"patient_id": patient_id}}
            )
            raise PatientNotFoundError(f"Patient with ID {patient_id} not found")
