"""Management commands for the clinic appointment API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import click

from clinic.core.exceptions import ClinicError
from clinic.db.session import get_database
from clinic.repositories.appointment_repo import AppointmentRepository
from clinic.repositories.doctor_repo import DoctorRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.unit_of_work import SqlAlchemyUnitOfWork
from clinic.schemas.dtos import AddAppointmentDto, AddDoctorDto, AddPatientDto
from clinic.services.appointment_service import AppointmentService
from clinic.services.doctor_service import DoctorService
from clinic.services.patient_service import PatientService

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init-db")
@click.option("--database-url", default=None, help="Overrides DATABASE_URL.")
@click.option("--drop", is_flag=True, help="Drop existing tables first.")
def init_db(database_url: Optional[str], drop: bool) -> None:
    """Create the doctors, patients and appointments tables."""
    database = get_database(database_url)
    try:
        if drop:
            database.drop_tables()
            logging.info("Dropped existing tables on %r", database)
        database.create_tables()
        logging.info("Tables ready on %r", database)
    finally:
        database.dispose()


@cli.command("seed-demo")
@click.option("--database-url", default=None, help="Overrides DATABASE_URL.")
def seed_demo(database_url: Optional[str]) -> None:
    """Insert one demo doctor, patient and appointment."""
    database = get_database(database_url)
    database.create_tables()
    session = database.session()
    try:
        uow = SqlAlchemyUnitOfWork(session)
        doctors = DoctorRepository(session)
        patients = PatientRepository(session)

        try:
            doctor = DoctorService(doctors, uow).add(
                AddDoctorDto("Sara", "Ahmadi", "2380132933", "Cardiology")
            )
            patient = PatientService(patients, uow).add(
                AddPatientDto("Reza", "Karimi", "2380257515")
            )
            appointment = AppointmentService(
                AppointmentRepository(session), doctors, patients, uow
            ).add(AddAppointmentDto(doctor.id, patient.id, datetime(2022, 4, 28, 9)))
        except ClinicError as e:
            raise click.ClickException(f"Seeding failed: {e.message}") from e

        logging.info(
            "Seeded doctor id=%s, patient id=%s, appointment id=%s",
            doctor.id,
            patient.id,
            appointment.id,
        )
    finally:
        session.close()
        database.dispose()


if __name__ == "__main__":
    cli()
