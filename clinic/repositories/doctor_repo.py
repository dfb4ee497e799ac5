"""Doctor repository implementation following SOLID principles.

Stages CRUD changes on the session it was given and answers the existence
predicates the doctor service needs. Nothing here commits.
"""

from typing import List, Optional

from clinic.db.base import Doctor as DbDoctor
from clinic.domain.entities import Doctor as DomainDoctor
from clinic.domain.interfaces import IDoctorRepository
from clinic.repositories.unit_of_work import flush_or_conflict
from clinic.schemas.dtos import GetDoctorDto
from clinic.schemas.mappers import doctor_from_row, doctor_to_dto


class DoctorRepository(IDoctorRepository):
    """Repository for Doctor persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, doctor_id: int) -> Optional[DomainDoctor]:
        db_doctor = self.db.get(DbDoctor, doctor_id)
        return doctor_from_row(db_doctor) if db_doctor else None

    def get_by_dto(self, doctor_id: int) -> Optional[GetDoctorDto]:
        db_doctor = self.db.get(DbDoctor, doctor_id)
        return doctor_to_dto(db_doctor) if db_doctor else None

    def get_all(self) -> List[GetDoctorDto]:
        db_doctors = self.db.query(DbDoctor).order_by(DbDoctor.id).all()
        return [doctor_to_dto(d) for d in db_doctors]

    def is_exist_national_code(self, national_code: str) -> bool:
        query = self.db.query(DbDoctor.id).filter(
            DbDoctor.national_code == national_code
        )
        return self.db.query(query.exists()).scalar()

    def is_exist_national_code_except_self(
        self, doctor_id: int, national_code: str
    ) -> bool:
        query = self.db.query(DbDoctor.id).filter(
            DbDoctor.national_code == national_code, DbDoctor.id != doctor_id
        )
        return self.db.query(query.exists()).scalar()

    def add(self, doctor: DomainDoctor) -> DomainDoctor:
        db_doctor = DbDoctor(
            national_code=doctor.national_code,
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            field=doctor.field,
        )
        self.db.add(db_doctor)
        # Flush so the store assigns the identity before commit
        flush_or_conflict(self.db)
        doctor.id = db_doctor.id
        return doctor

    def update(self, doctor: DomainDoctor) -> DomainDoctor:
        if not doctor.id:
            raise ValueError("Doctor ID is required for update")

        db_doctor = self.db.get(DbDoctor, doctor.id)
        if not db_doctor:
            raise ValueError(f"Doctor with ID {doctor.id} not found")

        db_doctor.national_code = doctor.national_code
        db_doctor.first_name = doctor.first_name
        db_doctor.last_name = doctor.last_name
        db_doctor.field = doctor.field
        return doctor

    def delete(self, doctor: DomainDoctor) -> None:
        db_doctor = self.db.get(DbDoctor, doctor.id)
        if db_doctor is not None:
            self.db.delete(db_doctor)
