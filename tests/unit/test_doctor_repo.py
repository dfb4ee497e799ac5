"""
Repository tests for DoctorRepository against an in-memory SQLite store.
"""

import pytest

from clinic.core.exceptions import StoreConflictError
from tests.factories.test_factories import DoctorFactory


def _add(doctor_repo, unit_of_work, **kwargs):
    doctor = doctor_repo.add(DoctorFactory.create_entity(id=None, **kwargs))
    unit_of_work.commit()
    return doctor


@pytest.mark.unit
@pytest.mark.repositories
@pytest.mark.doctor
class TestDoctorRepository:
    def test_add_assigns_id(self, doctor_repo, unit_of_work):
        doctor = _add(doctor_repo, unit_of_work)

        assert doctor.id is not None
        stored = doctor_repo.get_by_id(doctor.id)
        assert stored.national_code == "2380132933"
        assert stored.field == "Cardiology"

    def test_get_by_dto_missing(self, doctor_repo):
        assert doctor_repo.get_by_dto(404) is None
        assert doctor_repo.get_by_id(404) is None

    def test_get_all_ordered_by_id(self, doctor_repo, unit_of_work):
        first = _add(doctor_repo, unit_of_work, national_code="1")
        second = _add(doctor_repo, unit_of_work, national_code="2")

        assert [d.id for d in doctor_repo.get_all()] == [first.id, second.id]

    def test_national_code_predicates(self, doctor_repo, unit_of_work):
        doctor = _add(doctor_repo, unit_of_work)

        assert doctor_repo.is_exist_national_code("2380132933") is True
        assert doctor_repo.is_exist_national_code("0000000000") is False
        assert (
            doctor_repo.is_exist_national_code_except_self(doctor.id, "2380132933")
            is False
        )
        assert (
            doctor_repo.is_exist_national_code_except_self(doctor.id + 1, "2380132933")
            is True
        )

    def test_duplicate_national_code_is_rejected_by_store(
        self, doctor_repo, unit_of_work
    ):
        _add(doctor_repo, unit_of_work)

        with pytest.raises(StoreConflictError):
            doctor_repo.add(DoctorFactory.create_entity(id=None))

    def test_update_overwrites_row(self, doctor_repo, unit_of_work):
        doctor = _add(doctor_repo, unit_of_work)
        doctor.field = "Neurology"

        doctor_repo.update(doctor)
        unit_of_work.commit()

        assert doctor_repo.get_by_dto(doctor.id).field == "Neurology"

    def test_update_without_id(self, doctor_repo):
        with pytest.raises(ValueError, match="ID is required"):
            doctor_repo.update(DoctorFactory.create_entity(id=None))

    def test_delete(self, doctor_repo, unit_of_work):
        doctor = _add(doctor_repo, unit_of_work)

        doctor_repo.delete(doctor)
        unit_of_work.commit()

        assert doctor_repo.get_by_id(doctor.id) is None

    def test_delete_removes_only_that_doctor(self, doctor_repo, unit_of_work):
        doctor = _add(doctor_repo, unit_of_work)
        other = _add(doctor_repo, unit_of_work, national_code="1111111111")

        doctor_repo.delete(doctor)
        unit_of_work.commit()

        assert [d.id for d in doctor_repo.get_all()] == [other.id]
        assert doctor_repo.get_by_id(other.id).national_code == "1111111111"

    def test_changes_are_not_durable_without_commit(
        self, doctor_repo, unit_of_work, db_session
    ):
        doctor = doctor_repo.add(DoctorFactory.create_entity(id=None))

        unit_of_work.rollback()

        assert doctor_repo.get_by_id(doctor.id) is None
