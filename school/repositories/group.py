"""Group repository implementing persistence-only operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute

from school.models.group import Group
from school.models.student import Student
from school.repositories.base import BaseRepository


class GroupRepository(BaseRepository[Group]):
    """Persist :class:`Group` rows and expose enrollment-size lookups."""

    model = Group

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]] | None:
        return {"id": self.model.id, "name": self.model.name}

    def get_by_name(self, name: str) -> Group | None:
        """
        Find a group by its exact name.

        :param name: Group name such as ``"AB-12"``.
        :type name: str
        :returns: Group or ``None``.
        :rtype: Group | None
        """
        stmt: Select[Any] = select(self.model).where(self.model.name == name)
        result = self.session.execute(stmt).scalars().first()
        return cast(Group | None, result)

    def find_by_max_student_count(self, max_count: int) -> list[tuple[Group, int]]:
        """
        Return groups having at most ``max_count`` students, with their counts.

        Groups without students are included (count ``0``). Ordered by group id.

        :param max_count: Inclusive upper bound on enrolled students.
        :type max_count: int
        :returns: ``(group, student_count)`` pairs.
        :rtype: list[tuple[Group, int]]
        """
        student_count = func.count(Student.id)
        stmt = (
            select(self.model, student_count)
            .outerjoin(Student, Student.group_id == self.model.id)
            .group_by(self.model.id, self.model.name)
            .having(student_count <= max_count)
            .order_by(self.model.id.asc())
        )
        return [(group, int(count)) for group, count in self.session.execute(stmt).all()]

    def student_counts(self) -> dict[int, int]:
        """Map every group id to its number of enrolled students."""
        stmt = (
            select(self.model.id, func.count(Student.id))
            .outerjoin(Student, Student.group_id == self.model.id)
            .group_by(self.model.id)
        )
        return {group_id: int(count) for group_id, count in self.session.execute(stmt).all()}
