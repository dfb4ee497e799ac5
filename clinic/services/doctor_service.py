"""
Doctor service following SOLID principles.
"""

import logging
from typing import List, Optional

from clinic.core.exceptions import (
    DoctorAlreadyExistError,
    DoctorNotFoundError,
    StoreConflictError,
)
from clinic.domain.interfaces import IDoctorRepository, IUnitOfWork
from clinic.schemas.dtos import AddDoctorDto, GetDoctorDto, UpdateDoctorDto
from clinic.schemas.mappers import (
    apply_doctor_update,
    doctor_from_add_dto,
    doctor_to_dto,
)

logger = logging.getLogger(__name__)


class DoctorService:
    """Application service for doctor-related use-cases.

    Business Rules:
    - National code is unique among doctors
    - Update and delete require an existing doctor
    """

    def __init__(self, repository: IDoctorRepository, unit_of_work: IUnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    def add(self, dto: AddDoctorDto) -> GetDoctorDto:
        dto.validate()

        if self.repository.is_exist_national_code(dto.national_code):
            logger.warning(
                "Rejected duplicate doctor national code",
                extra={"context": {"national_code": dto.national_code}},
            )
            raise DoctorAlreadyExistError()

        doctor = doctor_from_add_dto(dto)
        try:
            self.repository.add(doctor)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            raise DoctorAlreadyExistError() from e

        logger.info("Doctor added", extra={"context": {"doctor_id": doctor.id}})
        return doctor_to_dto(doctor)

    def get_all(self) -> List[GetDoctorDto]:
        return self.repository.get_all()

    def get_by_dto(self, doctor_id: int) -> Optional[GetDoctorDto]:
        return self.repository.get_by_dto(doctor_id)

    def update(self, doctor_id: int, dto: UpdateDoctorDto) -> None:
        dto.validate()

        doctor = self.repository.get_by_id(doctor_id)
        self._prevent_when_doctor_not_exist(doctor, doctor_id)

        if doctor.national_code != dto.national_code:
            if self.repository.is_exist_national_code_except_self(
                doctor_id, dto.national_code
            ):
                logger.warning(
                    "Rejected doctor update to a taken national code",
                    extra={
                        "context": {
                            "doctor_id": doctor_id,
                            "national_code": dto.national_code,
                        }
                    },
                )
                raise DoctorAlreadyExistError()

        apply_doctor_update(doctor, dto)
        try:
            self.repository.update(doctor)
            self.unit_of_work.commit()
        except StoreConflictError as e:
            raise DoctorAlreadyExistError() from e

        logger.info("Doctor updated", extra={"context": {"doctor_id": doctor_id}})

    def delete(self, doctor_id: int) -> None:
        doctor = self.repository.get_by_id(doctor_id)
        self._prevent_when_doctor_not_exist(doctor, doctor_id)

        self.repository.delete(doctor)
        self.unit_of_work.commit()
        logger.info("Doctor deleted", extra={"context": {"doctor_id": doctor_id}})

    @staticmethod
    def _prevent_when_doctor_not_exist(doctor, doctor_id: int) -> None:
        if doctor is None:
            logger.warning(
                "Doctor not found", extra={"context": {"doctor_id": doctor_id}}
            )
            raise DoctorNotFoundError(f"Doctor with ID {doctor_id} not found")
