"""
Appointment repository implementation following SOLID principles.

Day-granularity predicates compare against the stored ``day`` column, so the
time of day of an appointment never affects duplicate or capacity checks.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func

from clinic.db.base import Appointment as DbAppointment
from clinic.db.base import Doctor as DbDoctor
from clinic.db.base import Patient as DbPatient
from clinic.domain.entities import Appointment as DomainAppointment
from clinic.domain.interfaces import IAppointmentRepository
from clinic.repositories.unit_of_work import flush_or_conflict
from clinic.schemas.dtos import GetAppointmentDto
from clinic.schemas.mappers import appointment_from_row, appointment_to_dto


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def _joined_query(self):
        return (
            self.db.query(DbAppointment, DbDoctor, DbPatient)
            .join(DbDoctor, DbAppointment.doctor_id == DbDoctor.id)
            .join(DbPatient, DbAppointment.patient_id == DbPatient.id)
        )

    def get_by_id(self, appointment_id: int) -> Optional[DomainAppointment]:
        db_appointment = self.db.get(DbAppointment, appointment_id)
        return appointment_from_row(db_appointment) if db_appointment else None

    def get_by_dto(self, appointment_id: int) -> Optional[GetAppointmentDto]:
        row = self._joined_query().filter(DbAppointment.id == appointment_id).first()
        if row is None:
            return None
        appointment, doctor, patient = row
        return appointment_to_dto(appointment, doctor, patient)

    def get_all(self) -> List[GetAppointmentDto]:
        rows = self._joined_query().order_by(DbAppointment.id).all()
        return [
            appointment_to_dto(appointment, doctor, patient)
            for appointment, doctor, patient in rows
        ]

    def is_exist_appointment(
        self,
        doctor_id: int,
        patient_id: int,
        date: datetime,
        exclude_id: Optional[int] = None,
    ) -> bool:
        query = self.db.query(DbAppointment.id).filter(
            DbAppointment.doctor_id == doctor_id,
            DbAppointment.patient_id == patient_id,
            DbAppointment.day == date.date(),
        )
        if exclude_id is not None:
            query = query.filter(DbAppointment.id != exclude_id)
        return self.db.query(query.exists()).scalar()

    def count_doctor_appointments_on_day(
        self, doctor_id: int, date: datetime, exclude_id: Optional[int] = None
    ) -> int:
        query = self.db.query(func.count(DbAppointment.id)).filter(
            DbAppointment.doctor_id == doctor_id,
            DbAppointment.day == date.date(),
        )
        if exclude_id is not None:
            query = query.filter(DbAppointment.id != exclude_id)
        return query.scalar() or 0

    def lock_doctor(self, doctor_id: int) -> None:
        # SELECT ... FOR UPDATE; SQLite has no row locks and ignores it
        (
            self.db.query(DbDoctor.id)
            .filter(DbDoctor.id == doctor_id)
            .with_for_update()
            .first()
        )

    def add(self, appointment: DomainAppointment) -> DomainAppointment:
        db_appointment = DbAppointment(
            date=appointment.date,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
        )
        self.db.add(db_appointment)
        flush_or_conflict(self.db)
        appointment.id = db_appointment.id
        return appointment

    def update(self, appointment: DomainAppointment) -> DomainAppointment:
        if not appointment.id:
            raise ValueError("Appointment ID is required for update")

        db_appointment = self.db.get(DbAppointment, appointment.id)
        if not db_appointment:
            raise ValueError(f"Appointment with ID {appointment.id} not found")

        db_appointment.date = appointment.date
        db_appointment.doctor_id = appointment.doctor_id
        db_appointment.patient_id = appointment.patient_id
        return appointment

    def delete(self, appointment: DomainAppointment) -> None:
        db_appointment = self.db.get(DbAppointment, appointment.id)
        if db_appointment is not None:
            self.db.delete(db_appointment)
