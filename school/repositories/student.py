"""Student repository implementing persistence-only operations.

Deleting a student relies on the store's ``ON DELETE CASCADE`` to remove its
assignments in the same statement.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute

from school.models.assignment import StudentAssignment
from school.models.course import Course
from school.models.student import Student
from school.repositories.base import BaseRepository


class StudentRepository(BaseRepository[Student]):
    """Persist :class:`Student` rows and expose course-based lookups."""

    model = Student

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]] | None:
        return {
            "id": self.model.id,
            "group_id": self.model.group_id,
            "first_name": self.model.first_name,
            "last_name": self.model.last_name,
        }

    def find_by_course_name(self, course_name: str) -> list[Student]:
        """
        List students assigned to the course with the given name.

        :param course_name: Exact course name.
        :type course_name: str
        :returns: Students ordered by id.
        :rtype: list[Student]
        """
        stmt: Select[Any] = (
            select(self.model)
            .join(StudentAssignment, StudentAssignment.student_id == self.model.id)
            .join(Course, Course.id == StudentAssignment.course_id)
            .where(Course.name == course_name)
            .order_by(self.model.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
