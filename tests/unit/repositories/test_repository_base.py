"""Unit tests for the generic ``BaseRepository`` helpers (via students)."""

from __future__ import annotations

import pytest

from school.models import Student
from school.repositories import StudentAssignmentRepository, StudentRepository
from tests.factories.school import GroupFactory, StudentFactory


class TestBaseRepository:
    """Confirm CRUD, counting and listing behave generically."""

    @pytest.fixture()
    def repo(self, session) -> StudentRepository:
        return StudentRepository(session=session)

    def test_add_materializes_primary_key(self, repo):
        student = repo.add(Student(first_name="Ann", last_name="Lee"))

        assert student.id is not None
        assert repo.get(student.id) is student

    def test_get_missing_returns_none(self, repo):
        assert repo.get(123) is None
        assert repo.get_for_update(123) is None

    def test_count_applies_whitelisted_filters(self, repo):
        group = GroupFactory()
        StudentFactory(first_name="Ann", group=group)
        StudentFactory(first_name="Bob", group=group)
        StudentFactory(first_name="Ann")

        assert repo.count(first_name="Ann") == 2
        assert repo.count(group_id=group.id) == 2
        assert repo.count(first_name="Ann", group_id=group.id) == 1
        assert repo.count(not_a_column="x") == 3
        assert repo.count() == 3

    def test_list_orders_by_primary_key(self, repo):
        a = StudentFactory(first_name="Cid", last_name="Lee")
        b = StudentFactory(first_name="Ann", last_name="Adams")
        c = StudentFactory(first_name="Bob", last_name="Lee")

        assert [s.id for s in repo.list()] == sorted([a.id, b.id, c.id])

    def test_delete_and_delete_by_id(self, repo):
        first, second = StudentFactory(), StudentFactory()

        repo.delete(first)
        deleted = repo.delete_by_id(second.id)

        assert deleted is second
        assert repo.delete_by_id(second.id) is None
        assert repo.count() == 0

    def test_lookup_by_pk_needs_single_column_key(self, session):
        with pytest.raises(RuntimeError, match="no single-column primary key"):
            StudentAssignmentRepository(session).get(1)
