"""Repository for the student-course association."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, cast

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import InstrumentedAttribute

from school.models.assignment import StudentAssignment
from school.repositories.base import BaseRepository


class StudentAssignmentRepository(BaseRepository[StudentAssignment]):
    """Persist ``(student_id, course_id)`` pairs.

    The pair is the identity, so the single-key helpers of the base class are
    replaced by pair-aware ones.
    """

    model = StudentAssignment

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return None

    def get_pair(self, student_id: int, course_id: int) -> StudentAssignment | None:
        """
        Fetch the assignment of ``student_id`` to ``course_id``.

        :returns: Assignment or ``None``.
        :rtype: StudentAssignment | None
        """
        stmt: Select[Any] = select(self.model).where(
            self.model.student_id == student_id,
            self.model.course_id == course_id,
        )
        result = self.session.execute(stmt).scalars().first()
        return cast(StudentAssignment | None, result)

    def count_pair(self, student_id: int, course_id: int) -> int:
        """Count stored rows for the pair (``0`` or ``1`` while the invariant holds)."""
        return self.count(student_id=student_id, course_id=course_id)

    def remove(self, student_id: int, course_id: int) -> int:
        """
        Delete the assignment of ``student_id`` to ``course_id``.

        :returns: Number of deleted rows.
        :rtype: int
        """
        stmt = delete(self.model).where(
            self.model.student_id == student_id,
            self.model.course_id == course_id,
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def add_many(self, pairs: Iterable[tuple[int, int]]) -> int:
        """Stage several pairs at once and flush; returns how many were added."""
        rows = [self.model(student_id=s, course_id=c) for s, c in pairs]
        self.session.add_all(rows)
        self.flush()
        return len(rows)

    def list_for_student(self, student_id: int) -> list[StudentAssignment]:
        """List a student's assignments ordered by course id."""
        stmt: Select[Any] = (
            select(self.model)
            .where(self.model.student_id == student_id)
            .order_by(self.model.course_id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

