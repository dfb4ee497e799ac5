"""
Patient controller for handling HTTP requests following SOLID principles.

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
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.unit_of_work import SqlAlchemyUnitOfWork
from clinic.schemas.dtos import AddPatientDto, UpdatePatientDto
from clinic.schemas.mappers import to_dict
from clinic.services.patient_service import PatientService

logger = logging.getLogger(__name__)

patient_bp = Blueprint("patient", __name__, url_prefix="/patients")


def _patient_service(db) -> PatientService:
    return PatientService(PatientRepository(db), SqlAlchemyUnitOfWork(db))


def _patient_dto_from_body(dto_class):
    body = get_json_body()
    return dto_class(
        first_name=body.get("first_name"),
        last_name=body.get("last_name"),
        national_code=body.get("national_code"),
    )


@patient_bp.route("/", methods=["GET"])
def list_patients():
    """List all patients."""
    db = current_app.extensions["clinic_db"].session()
    try:
        patients = _patient_service(db).get_all()
        return api_response(
            True, "Patients retrieved", [to_dict(p) for p in patients]
        )
    except Exception as e:
        logger.error(
            "Failed to list patients",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@patient_bp.route("/", methods=["POST"])
@limiter.limit("30 per minute")
def create_patient():
    """Register a patient from a JSON body."""
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _patient_dto_from_body(AddPatientDto)
        created = _patient_service(db).add(dto)
        return api_response(True, "Patient created", to_dict(created), 201)
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        logger.error(
            "Failed to create patient",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Internal server error", None, 500)
    finally:
        db.close()


@patient_bp.route("/<int:patient_id>", methods=["GET"])
def get_patient(patient_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        patient = _patient_service(db).get_by_dto(patient_id)
        if patient is None:
            return api_response(
                False, f"Patient with ID {patient_id} not found", None, 404
            )
        return api_response(True, "Patient retrieved", to_dict(patient))
    except Exception as e:
        return internal_error_response("get patient", e)
    finally:
        db.close()


@patient_bp.route("/<int:patient_id>", methods=["PUT"])
@limiter.limit("30 per minute")
def update_patient(patient_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        dto = _patient_dto_from_body(UpdatePatientDto)
        service = _patient_service(db)
        service.update(patient_id, dto)
        return api_response(
            True, "Patient updated", to_dict(service.get_by_dto(patient_id))
        )
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("update patient", e)
    finally:
        db.close()


@patient_bp.route("/<int:patient_id>", methods=["DELETE"])
@limiter.limit("30 per minute")
def delete_patient(patient_id: int):
    db = current_app.extensions["clinic_db"].session()
    try:
        _patient_service(db).delete(patient_id)
        return api_response(True, "Patient deleted")
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response("delete patient", e)
    finally:
        db.close()
