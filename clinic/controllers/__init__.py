# Controllers package initialization
# HTTP blueprints for the clinic API

from .appointment_controller import appointment_bp
from .doctor_controller import doctor_bp
from .health_controller import health_bp
from .patient_controller import patient_bp

__all__ = ["appointment_bp", "doctor_bp", "health_bp", "patient_bp"]
