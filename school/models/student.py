"""Student model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from school.core.extensions import db

from .base import ReprMixin

if TYPE_CHECKING:
    from .assignment import StudentAssignment
    from .group import Group

NAME_MAX_LENGTH = 50


class Student(ReprMixin, db.Model):
    """
    Student optionally enrolled in a :class:`Group`.

    Fields
    ------
    group_id : int | None
        FK to :class:`Group`. ``ON DELETE SET NULL``.
    first_name, last_name : str
        Required, stripped, at most 50 characters.

    Deleting a student removes its assignments through the store's
    ``ON DELETE CASCADE``; the relationship only mirrors it.
    """

    __tablename__ = "students"

    id: Mapped[int] = mapped_column("student_id", Integer, primary_key=True)
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.group_id", ondelete="SET NULL"), nullable=True
    )
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    last_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    group: Mapped[Group | None] = relationship("Group", back_populates="students")
    assignments: Mapped[list[StudentAssignment]] = relationship(
        "StudentAssignment",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_students_group_id", "group_id"),)

    @validates("first_name", "last_name")
    def _validate_name(self, key: str, value: str) -> str:
        """Trim names and reject blank or oversized values."""
        v = (value or "").strip()
        if not v:
            raise ValueError(f"{key} must not be blank.")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"{key} must be at most {NAME_MAX_LENGTH} characters.")
        return v
