"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.

Writers only stage changes; nothing is durable until IUnitOfWork.commit().
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from .entities import Appointment, Doctor, Patient

if TYPE_CHECKING:
    from clinic.schemas.dtos import GetAppointmentDto, GetDoctorDto, GetPatientDto


class IUnitOfWork(ABC):
    """Commit boundary shared by the repositories of one session."""

    @abstractmethod
    def commit(self) -> None:
        """Durably persist all staged mutations, or fail atomically."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard all staged mutations."""
        pass


class IDoctorReader(ABC):
    """Interface for doctor read operations - Interface Segregation Principle."""

    @abstractmethod
    def get_by_id(self, doctor_id: int) -> Optional[Doctor]:
        """Get doctor entity by ID."""
        pass

    @abstractmethod
    def get_by_dto(self, doctor_id: int) -> Optional["GetDoctorDto"]:
        """Get doctor projected to its read DTO."""
        pass

    @abstractmethod
    def get_all(self) -> List["GetDoctorDto"]:
        """Get all doctors projected to read DTOs."""
        pass

    @abstractmethod
    def is_exist_national_code(self, national_code: str) -> bool:
        """Check whether any doctor holds the national code."""
        pass

    @abstractmethod
    def is_exist_national_code_except_self(
        self, doctor_id: int, national_code: str
    ) -> bool:
        """Check whether a doctor other than doctor_id holds the national code."""
        pass


class IDoctorWriter(ABC):
    """Interface for doctor write operations - Interface Segregation Principle."""

    @abstractmethod
    def add(self, doctor: Doctor) -> Doctor:
        """Stage a new doctor and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, doctor: Doctor) -> Doctor:
        """Stage the overwrite of an existing doctor."""
        pass

    @abstractmethod
    def delete(self, doctor: Doctor) -> None:
        """Stage the removal of a doctor."""
        pass


class IDoctorRepository(IDoctorReader, IDoctorWriter):
    """Complete doctor repository interface combining read/write operations."""

    pass


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        """Get patient entity by ID."""
        pass

    @abstractmethod
    def get_by_dto(self, patient_id: int) -> Optional["GetPatientDto"]:
        """Get patient projected to its read DTO."""
        pass

    @abstractmethod
    def get_all(self) -> List["GetPatientDto"]:
        """Get all patients projected to read DTOs."""
        pass

    @abstractmethod
    def is_exist_national_code(self, national_code: str) -> bool:
        """Check whether any patient holds the national code."""
        pass

    @abstractmethod
    def is_exist_national_code_except_self(
        self, patient_id: int, national_code: str
    ) -> bool:
        """Check whether a patient other than patient_id holds the national code."""
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def add(self, patient: Patient) -> Patient:
        """Stage a new patient and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, patient: Patient) -> Patient:
        """Stage the overwrite of an existing patient."""
        pass

    @abstractmethod
    def delete(self, patient: Patient) -> None:
        """Stage the removal of a patient."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment entity by ID."""
        pass

    @abstractmethod
    def get_by_dto(self, appointment_id: int) -> Optional["GetAppointmentDto"]:
        """Get appointment with embedded doctor and patient summaries."""
        pass

    @abstractmethod
    def get_all(self) -> List["GetAppointmentDto"]:
        """Get all appointments with embedded doctor and patient summaries."""
        pass

    @abstractmethod
    def is_exist_appointment(
        self,
        doctor_id: int,
        patient_id: int,
        date: datetime,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Check for an appointment of the same doctor and patient on that day."""
        pass

    @abstractmethod
    def count_doctor_appointments_on_day(
        self, doctor_id: int, date: datetime, exclude_id: Optional[int] = None
    ) -> int:
        """Count the doctor's appointments on the calendar day of date."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def add(self, appointment: Appointment) -> Appointment:
        """Stage a new appointment and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        """Stage the overwrite of an existing appointment."""
        pass

    @abstractmethod
    def delete(self, appointment: Appointment) -> None:
        """Stage the removal of an appointment."""
        pass

    @abstractmethod
    def lock_doctor(self, doctor_id: int) -> None:
        """Serialize bookings for one doctor until the next commit/rollback."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass
