"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class Doctor:
    """Domain entity representing a Doctor.

    This is the pure business representation, independent of:
    - Database implementation (SQLAlchemy)
    - HTTP frameworks (Flask)
    """

    id: Optional[int] = None
    national_code: str = ""
    first_name: str = ""
    last_name: str = ""
    field: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.national_code:
            raise ValueError("National code is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Patient:
    """Domain entity representing a Patient."""

    id: Optional[int] = None
    national_code: str = ""
    first_name: str = ""
    last_name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.national_code:
            raise ValueError("National code is required")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Appointment:
    """Domain entity for a booked visit of one patient with one doctor."""

    id: Optional[int] = None
    date: Optional[datetime] = None
    doctor_id: int = 0
    patient_id: int = 0
    doctor: Optional[Doctor] = None
    patient: Optional[Patient] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if self.date is None:
            raise ValueError("Appointment date is required")
        if self.doctor_id <= 0:
            raise ValueError("Valid doctor_id is required")
        if self.patient_id <= 0:
            raise ValueError("Valid patient_id is required")

    @property
    def day(self) -> date:
        """Calendar day used by the duplicate and capacity rules."""
        return self.date.date()

    def is_same_slot(self, doctor_id: int, patient_id: int, when: datetime) -> bool:
        """True if this appointment books the same doctor and patient on that day."""
        return (
            self.doctor_id == doctor_id
            and self.patient_id == patient_id
            and self.day == when.date()
        )
