"""
Appointment controller - booking endpoints.

Request bodies carry ``doctor_id``, ``patient_id`` and an ISO-8601 ``date``.
Business rule violations come back as the standard envelope with status 409.
"""

import logging

from flask import Blueprint, current_app

from clinic.core.api_utils import (
    api_response,
    error_response,
    internal_error_response,
    get_json_body,
    parse_iso_datetime,
)
from clinic.core.config import get_max_daily_appointments
from clinic.core.exceptions import ClinicError
from clinic.core.limiter_config import limiter
from clinic.repositories.appointment_repo import AppointmentRepository
from clinic.repositories.doctor_repo import DoctorRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.unit_of_work import SqlAlchemyUnitOfWork
from clinic.schemas.dtos import AddAppointmentDto, UpdateAppointmentDto
from clinic.schemas.mappers import to_dict
from clinic.services.appointment_service import AppointmentService

logger = logging.getLogger(__name__)

appointment_bp = Blueprint("appointment", __name__, url_prefix="/appointments")


def _appointment_service(db) -> AppointmentService:
    return AppointmentService(
        AppointmentRepository(db),
        DoctorRepository(db),
        PatientRepository(db),
        SqlAlchemyUnitOfWork(db),
        max_daily_appointments=current_app.config.get(
            "MAX_DAILY_APPOINTMENTS", get_max_daily_appointments()
        ),
    )


def _appointment_dto_from_body(dto_class):
    body = get_json_body()
    return dto_class(
        doctor_id=body.get("doctor_id"),
        patient_id=body.get("patient_id"),
        date=parse_iso_datetime(body.get("date")),
    )


@appointment_bp.route("/", methods=["GET"])
def list_appointments():
    db = current_app.extensions["clinic_db"].session()
    try:
        appointments = _appointment_service(db).get_all()
        return api_response(
            True, "Appointments retrieved", [to_dict(a) for a in appointments]
        )
    except Exception as e:
        logger.error(
            "Failed to list appointments",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@appointment_bp.route("/", methods=["POST"])
@limiter.limit("30 per minute")
def create_appointment():
    """Book an appointment.

    Status codes:
        201: booked
        400: malformed body
        404: unknown doctor or patient
        409: duplicate for the day, or doctor fully booked
    """
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _appointment_dto_from_body(AddAppointmentDto)
        created = _appointment_service(db).add(dto)
        return api_response(True, "Appointment created", to_dict(created), 201)
    except ClinicError as e:
        logger.info(
            "Appointment request rejected",
            extra={"context": {"error": e.error_code}},
        )
        return error_response(e)
    except Exception as e:
        logger.error(
            "Failed to create appointment",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        appointment = _appointment_service(db).get_appointment_by_id(appointment_id)
        if appointment is None:
            return api_response(
                False, f"Appointment with ID {appointment_id} not found", None, 404
            )
        return api_response(True, "Appointment retrieved", to_dict(appointment))
    except Exception as e:
        return internal_error_response("get appointment", e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>", methods=["PUT"])
@limiter.limit("30 per minute")
def update_appointment(appointment_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _appointment_dto_from_body(UpdateAppointmentDto)
        service = _appointment_service(db)
        service.update(appointment_id, dto)
        return api_response(
            True,
            "Appointment updated",
            to_dict(service.get_appointment_by_id(appointment_id)),
        )
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("update appointment", e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>", methods=["DELETE"])
@limiter.limit("30 per minute")
def delete_appointment(appointment_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        _appointment_service(db).delete(appointment_id)
        return api_response(True, "Appointment deleted")
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("delete appointment", e)
    finally:
        db.close()
