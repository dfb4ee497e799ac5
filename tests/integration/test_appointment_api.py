"""
API tests for the /appointments endpoints.

Covers the two booking rules over HTTP: one appointment per doctor,
patient and day, and at most five appointments per doctor per day.
"""

import pytest


@pytest.fixture
def doctor_id(client):
    response = client.post(
        "/doctors/",
        json={
            "first_name": "Sara",
            "last_name": "Ahmadi",
            "national_code": "2380132933",
            "field": "Cardiology",
        },
    )
    return response.get_json()["data"]["id"]


def _create_patient(client, national_code):
    response = client.post(
        "/patients/",
        json={"first_name": "Reza", "last_name": "Karimi", "national_code": national_code},
    )
    return response.get_json()["data"]["id"]


@pytest.fixture
def patient_id(client):
    return _create_patient(client, "2380257515")


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.appointment
class TestAppointmentApi:
    def test_book_and_reject_duplicate(
        self, client, response_helper, doctor_id, patient_id
    ):
        payload = {"doctor_id": doctor_id, "patient_id": patient_id, "date": "2022-04-28"}

        body = response_helper.assert_json_response(
            client.post("/appointments/", json=payload), 201
        )
        assert body["data"]["date"] == "2022-04-28T00:00:00"
        assert body["data"]["doctor"]["field"] == "Cardiology"
        assert body["data"]["patient"]["national_code"] == "2380257515"

        response_helper.assert_error(
            client.post(
                "/appointments/", json=dict(payload, date="2022-04-28T14:00:00")
            ),
            409,
            "appointment_already_exists",
        )

    def test_sixth_booking_is_full(self, client, response_helper, doctor_id):
        patient_ids = [_create_patient(client, f"90000000{i:02d}") for i in range(6)]

        for hour, patient in enumerate(patient_ids[:5], start=9):
            response_helper.assert_json_response(
                client.post(
                    "/appointments/",
                    json={
                        "doctor_id": doctor_id,
                        "patient_id": patient,
                        "date": f"2022-04-28T{hour:02d}:00:00",
                    },
                ),
                201,
            )

        response_helper.assert_error(
            client.post(
                "/appointments/",
                json={
                    "doctor_id": doctor_id,
                    "patient_id": patient_ids[5],
                    "date": "2022-04-28T16:00:00",
                },
            ),
            409,
            "appointment_count_is_full",
        )

    def test_unknown_patient(self, client, response_helper, doctor_id):
        response_helper.assert_error(
            client.post(
                "/appointments/",
                json={"doctor_id": doctor_id, "patient_id": 99, "date": "2022-04-28"},
            ),
            404,
            "patient_not_found",
        )

    def test_bad_date(self, client, response_helper, doctor_id, patient_id):
        body = response_helper.assert_error(
            client.post(
                "/appointments/",
                json={"doctor_id": doctor_id, "patient_id": patient_id, "date": "soon"},
            ),
            400,
            "validation_error",
        )
        assert body["data"]["field"] == "date"

    def test_string_id_is_rejected(self, client, response_helper, patient_id):
        response_helper.assert_error(
            client.post(
                "/appointments/",
                json={"doctor_id": "1", "patient_id": patient_id, "date": "2022-04-28"},
            ),
            400,
            "validation_error",
        )

    def test_get_update_delete(self, client, response_helper, doctor_id, patient_id):
        created = client.post(
            "/appointments/",
            json={"doctor_id": doctor_id, "patient_id": patient_id, "date": "2022-04-28"},
        ).get_json()["data"]

        fetched = response_helper.assert_json_response(
            client.get(f"/appointments/{created['id']}")
        )["data"]
        assert fetched == created

        moved = response_helper.assert_json_response(
            client.put(
                f"/appointments/{created['id']}",
                json={
                    "doctor_id": doctor_id,
                    "patient_id": patient_id,
                    "date": "2022-05-02T11:15:00",
                },
            )
        )["data"]
        assert moved["date"] == "2022-05-02T11:15:00"

        response_helper.assert_json_response(
            client.delete(f"/appointments/{created['id']}")
        )
        assert client.get(f"/appointments/{created['id']}").status_code == 404
        response_helper.assert_error(
            client.delete(f"/appointments/{created['id']}"),
            404,
            "appointment_not_found",
        )

    def test_offset_date_is_stored_in_utc(
        self, client, response_helper, doctor_id, patient_id
    ):
        body = response_helper.assert_json_response(
            client.post(
                "/appointments/",
                json={
                    "doctor_id": doctor_id,
                    "patient_id": patient_id,
                    "date": "2022-04-28T12:00:00+03:00",
                },
            ),
            201,
        )
        assert body["data"]["date"] == "2022-04-28T09:00:00"

        # Same UTC day, so the same doctor and patient cannot book again
        response_helper.assert_error(
            client.post(
                "/appointments/",
                json={
                    "doctor_id": doctor_id,
                    "patient_id": patient_id,
                    "date": "2022-04-28T20:00:00Z",
                },
            ),
            409,
            "appointment_already_exists",
        )

    def test_list_is_empty_initially(self, client, response_helper):
        body = response_helper.assert_json_response(client.get("/appointments/"))

        assert body["data"] == []


@pytest.mark.integration
@pytest.mark.api
def test_capacity_follows_environment(monkeypatch, response_helper):
    from clinic.main import create_app

    monkeypatch.setenv("MAX_DAILY_APPOINTMENTS", "1")
    app = create_app(database_url="sqlite:///:memory:", testing=True)
    client = app.test_client()
    doctor = client.post(
        "/doctors/",
        json={
            "first_name": "Sara",
            "last_name": "Ahmadi",
            "national_code": "1",
            "field": "Cardiology",
        },
    ).get_json()["data"]["id"]
    first = _create_patient(client, "2")
    second = _create_patient(client, "3")

    client.post(
        "/appointments/",
        json={"doctor_id": doctor, "patient_id": first, "date": "2022-04-28"},
    )
    response_helper.assert_error(
        client.post(
            "/appointments/",
            json={"doctor_id": doctor, "patient_id": second, "date": "2022-04-28"},
        ),
        409,
        "appointment_count_is_full",
    )
    app.extensions["clinic_db"].dispose()
