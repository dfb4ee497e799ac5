from __future__ import annotations

import datetime as dt
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .session import Base

NATIONAL_CODE_MAX_LENGTH = 10
NAME_MAX_LENGTH = 50
FIELD_MAX_LENGTH = 50


class Doctor(Base):
    """Doctor model for database persistence"""

    __tablename__ = "doctors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    national_code: Mapped[str] = mapped_column(
        String(NATIONAL_CODE_MAX_LENGTH), nullable=False
    )
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    field: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    created_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        back_populates="doctor", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("national_code", name="uq_doctors_national_code"),
    )

    def __repr__(self):
        return f"<Doctor(id={self.id}, national_code='{self.national_code}')>"


class Patient(Base):
    """Patient model for database persistence"""

    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    national_code: Mapped[str] = mapped_column(
        String(NATIONAL_CODE_MAX_LENGTH), nullable=False
    )
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    created_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    appointments: Mapped[List["Appointment"]] = relationship(
        back_populates="patient", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("national_code", name="uq_patients_national_code"),
    )

    def __repr__(self):
        return f"<Patient(id={self.id}, national_code='{self.national_code}')>"


class Appointment(Base):
    """Appointment model linking one doctor and one patient at a date/time"""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)
    # Calendar day of `date`, kept in sync by the validator below so the
    # day-granularity rules can be indexed and constrained by the store.
    day: Mapped[dt.date] = mapped_column(Date, nullable=False)
    doctor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False
    )
    patient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    doctor: Mapped["Doctor"] = relationship(back_populates="appointments")
    patient: Mapped["Patient"] = relationship(back_populates="appointments")

    __table_args__ = (
        UniqueConstraint(
            "doctor_id", "patient_id", "day", name="uq_appointments_doctor_patient_day"
        ),
        Index("ix_appointments_doctor_day", "doctor_id", "day"),
    )

    @validates("date")
    def _sync_day(self, key, value):
        if value is not None:
            self.day = value.date() if isinstance(value, dt.datetime) else value
        return value

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, "
            f"patient_id={self.patient_id}, date={self.date})>"
        )
