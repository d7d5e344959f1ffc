"""Student-course assignment (many-to-many association)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school.core.extensions import db

from .base import ReprMixin

if TYPE_CHECKING:
    from .course import Course
    from .student import Student


class StudentAssignment(ReprMixin, db.Model):
    """Pair ``(student_id, course_id)``; the pair itself is the identity."""

    __tablename__ = "students_courses"

    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.student_id", ondelete="CASCADE"), primary_key=True
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.course_id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_students_courses_pair"),
        Index("ix_students_courses_course_id", "course_id"),
    )

    # Relationships
    student: Mapped[Student] = relationship("Student", back_populates="assignments")
    course: Mapped[Course] = relationship("Course", back_populates="assignments")
