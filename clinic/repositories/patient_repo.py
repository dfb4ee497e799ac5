"""Patient repository implementation following SOLID principles."""

from typing import List, Optional

from clinic.db.base import Patient as DbPatient
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository
from clinic.repositories.unit_of_work import flush_or_conflict
from clinic.schemas.dtos import GetPatientDto
from clinic.schemas.mappers import patient_from_row, patient_to_dto


class PatientRepository(IPatientRepository):
    """Repository for Patient persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, patient_id: int) -> Optional[DomainPatient]:
        db_patient = self.db.get(DbPatient, patient_id)
        return patient_from_row(db_patient) if db_patient else None

    def get_by_dto(self, patient_id: int) -> Optional[GetPatientDto]:
        db_patient = self.db.get(DbPatient, patient_id)
        return patient_to_dto(db_patient) if db_patient else None

    def get_all(self) -> List[GetPatientDto]:
        db_patients = self.db.query(DbPatient).order_by(DbPatient.id).all()
        return [patient_to_dto(p) for p in db_patients]

    def is_exist_national_code(self, national_code: str) -> bool:
        query = self.db.query(DbPatient.id).filter(
            DbPatient.national_code == national_code
        )
        return self.db.query(query.exists()).scalar()

    def is_exist_national_code_except_self(
        self, patient_id: int, national_code: str
    ) -> bool:
        query = self.db.query(DbPatient.id).filter(
            DbPatient.national_code == national_code, DbPatient.id != patient_id
        )
        return self.db.query(query.exists()).scalar()

    def add(self, patient: DomainPatient) -> DomainPatient:
        db_patient = DbPatient(
            national_code=patient.national_code,
            first_name=patient.first_name,
            last_name=patient.last_name,
        )
        self.db.add(db_patient)
        flush_or_conflict(self.db)
        patient.id = db_patient.id
        return patient

    def update(self, patient: DomainPatient) -> DomainPatient:
        if not patient.id:
            raise ValueError("Patient ID is required for update")

        db_patient = self.db.get(DbPatient, patient.id)
        if not db_patient:
            raise ValueError(f"Patient with ID {patient.id} not found")

        db_patient.national_code = patient.national_code
        db_patient.first_name = patient.first_name
        db_patient.last_name = patient.last_name
        return patient

    def delete(self, patient: DomainPatient) -> None:
        db_patient = self.db.get(DbPatient, patient.id)
        if db_patient is not None:
            self.db.delete(db_patient)
