"""Group model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from school.core.extensions import db

from .base import ReprMixin

if TYPE_CHECKING:
    from .student import Student


class Group(ReprMixin, db.Model):
    """
    Study group such as ``"AB-12"``.

    Enrolled students are derived from ``students.group_id``; a group is never
    mutated once created.
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column("group_id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column("group_name", String(16), nullable=False)

    students: Mapped[list[Student]] = relationship(
        "Student",
        back_populates="group",
        passive_deletes=True,
        order_by="Student.id",
    )

    __table_args__ = (UniqueConstraint("group_name", name="uq_groups_group_name"),)
