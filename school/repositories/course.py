"""Course repository implementing persistence-only operations."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Select, select

from school.models.assignment import StudentAssignment
from school.models.course import Course
from school.repositories.base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """Persist :class:`Course` rows and resolve the courses of a student."""

    model = Course

    def get_by_name(self, name: str) -> Course | None:
        """
        Find a course by its exact name.

        :param name: Course name (e.g. ``"Mathematics"``).
        :type name: str
        :returns: Course or ``None``.
        :rtype: Course | None
        """
        stmt: Select[Any] = select(self.model).where(self.model.name == name)
        result = self.session.execute(stmt).scalars().first()
        return cast(Course | None, result)

    def find_by_student(self, student_id: int) -> list[Course]:
        """
        List the courses a student is assigned to, ordered by course id.

        :param student_id: Student primary key.
        :type student_id: int
        :returns: Assigned courses (possibly empty).
        :rtype: list[Course]
        """
        stmt: Select[Any] = (
            select(self.model)
            .join(StudentAssignment, StudentAssignment.course_id == self.model.id)
            .where(StudentAssignment.student_id == student_id)
            .order_by(self.model.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
