"""
Doctor controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Depends on service abstractions (Dependency Inversion)
"""

import logging

from flask import Blueprint, current_app

from clinic.core.api_utils import (
    api_response,
    error_response,
    get_json_body,
    internal_error_response,
)
from clinic.core.exceptions import ClinicError
from clinic.core.limiter_config import limiter
from clinic.repositories.doctor_repo import DoctorRepository
from clinic.repositories.unit_of_work import SqlAlchemyUnitOfWork
from clinic.schemas.dtos import AddDoctorDto, UpdateDoctorDto
from clinic.schemas.mappers import to_dict
from clinic.services.doctor_service import DoctorService

logger = logging.getLogger(__name__)

doctor_bp = Blueprint("doctor", __name__, url_prefix="/doctors")


def _doctor_service(db) -> DoctorService:
    return DoctorService(DoctorRepository(db), SqlAlchemyUnitOfWork(db))


def _doctor_dto_from_body(dto_class):
    body = get_json_body()
    return dto_class(
        first_name=body.get("first_name"),
        last_name=body.get("last_name"),
        national_code=body.get("national_code"),
        field=body.get("field"),
    )


@doctor_bp.route("/", methods=["GET"])
def list_doctors():
    """List all doctors."""
    db = current_app.extensions["clinic_db"].session()
    try:
        doctors = _doctor_service(db).get_all()
        return api_response(
            True, "Doctors retrieved", [to_dict(d) for d in doctors]
        )
    except Exception as e:
        logger.error(
            "Failed to list doctors",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@doctor_bp.route("/", methods=["POST"])
@limiter.limit("30 per minute")
def create_doctor():
    """Register a doctor from a JSON body."""
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _doctor_dto_from_body(AddDoctorDto)
        created = _doctor_service(db).add(dto)
        return api_response(True, "Doctor created", to_dict(created), 201)
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        logger.error(
            "Failed to create doctor",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@doctor_bp.route("/<int:doctor_id>", methods=["GET"])
def get_doctor(doctor_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        doctor = _doctor_service(db).get_by_dto(doctor_id)
        if doctor is None:
            return api_response(
                False, f"Doctor with ID {doctor_id} not found", None, 404
            )
        return api_response(True, "Doctor retrieved", to_dict(doctor))
    except Exception as e:
        return internal_error_response("get doctor", e)
    finally:
        db.close()


@doctor_bp.route("/<int:doctor_id>", methods=["PUT"])
@limiter.limit("30 per minute")
def update_doctor(doctor_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _doctor_dto_from_body(UpdateDoctorDto)
        service = _doctor_service(db)
        service.update(doctor_id, dto)
        return api_response(
            True, "Doctor updated", to_dict(service.get_by_dto(doctor_id))
        )
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("update doctor", e)
    finally:
        db.close()


@doctor_bp.route("/<int:doctor_id>", methods=["DELETE"])
@limiter.limit("30 per minute")
def delete_doctor(doctor_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        _doctor_service(db).delete(doctor_id)
        return api_response(True, "Doctor deleted")
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("delete doctor", e)
    finally:
        db.close()
