"""
Unit tests for response envelopes and error status mapping.
"""

from datetime import datetime, timezone

import pytest
from flask import Flask

from clinic.core.api_utils import (
    api_response,
    error_response,
    get_json_body,
    parse_iso_datetime,
    status_for_error,
)
from clinic.core.exceptions import (
    AppointmentAlreadyExistError,
    AppointmentCountIsFullError,
    AppointmentNotFoundError,
    ClinicError,
    DoctorAlreadyExistError,
    PatientNotFoundError,
    StoreConflictError,
    ValidationError,
)


@pytest.fixture
def flask_app():
    return Flask(__name__)


@pytest.mark.unit
class TestStatusMapping:
    @pytest.mark.parametrize(
        "error,status",
        [
            (ValidationError("bad"), 400),
            (PatientNotFoundError(), 404),
            (AppointmentNotFoundError(), 404),
            (DoctorAlreadyExistError(), 409),
            (AppointmentAlreadyExistError(), 409),
            (AppointmentCountIsFullError(), 409),
            (StoreConflictError(), 409),
            (ClinicError(), 400),
        ],
    )
    def test_status_for_error(self, error, status):
        assert status_for_error(error) == status


@pytest.mark.unit
class TestEnvelopes:
    def test_api_response_omits_missing_data(self, flask_app):
        with flask_app.app_context():
            response, status = api_response(True, "ok")

        assert status == 200
        assert response.get_json() == {"success": True, "message": "ok"}

    def test_error_response_carries_code_and_field(self, flask_app):
        with flask_app.app_context():
            response, status = error_response(
                ValidationError("date is required", field="date")
            )

        body = response.get_json()
        assert status == 400
        assert body["success"] is False
        assert body["message"] == "date is required"
        assert body["data"] == {"error": "validation_error", "field": "date"}

    def test_error_response_for_full_doctor(self, flask_app):
        with flask_app.app_context():
            response, status = error_response(AppointmentCountIsFullError())

        assert status == 409
        assert response.get_json()["data"] == {"error": "appointment_count_is_full"}


@pytest.mark.unit
class TestRequestParsing:
    def test_parse_date_only(self):
        assert parse_iso_datetime("2022-04-28") == datetime(2022, 4, 28)

    def test_parse_datetime(self):
        assert parse_iso_datetime("2022-04-28T10:30:00") == datetime(
            2022, 4, 28, 10, 30
        )

    def test_parse_z_suffix_as_utc(self):
        parsed = parse_iso_datetime("2022-04-28T09:00:00Z")

        assert parsed == datetime(2022, 4, 28, 9, 0, tzinfo=timezone.utc)

    def test_parse_keeps_offset(self):
        parsed = parse_iso_datetime("2022-04-28T09:00:00+03:00")

        assert parsed.utcoffset().total_seconds() == 3 * 3600

    @pytest.mark.parametrize("value", [None, "", "28/04/2022", 20220428])
    def test_parse_rejects_bad_values(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_iso_datetime(value)

        assert exc_info.value.field == "date"

    def test_json_body_must_be_object(self, flask_app):
        with flask_app.test_request_context("/", method="POST", json=[1, 2]):
            with pytest.raises(ValidationError, match="JSON object"):
                get_json_body()

    def test_json_body_returns_dict(self, flask_app):
        with flask_app.test_request_context("/", method="POST", json={"a": 1}):
            assert get_json_body() == {"a": 1}
