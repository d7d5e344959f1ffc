"""Course model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school.core.extensions import db

from .base import ReprMixin

if TYPE_CHECKING:
    from .assignment import StudentAssignment


class Course(ReprMixin, db.Model):
    """Course students can be assigned to. Read-only for the operator."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column("course_id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column("course_name", String(64), nullable=False)
    description: Mapped[str | None] = mapped_column("course_description", Text, nullable=True)

    assignments: Mapped[list[StudentAssignment]] = relationship(
        "StudentAssignment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("course_name", name="uq_courses_course_name"),)
