"""Group lookups behind the console."""

from __future__ import annotations

from school.schemas import GroupSizeQuerySchema
from school.services._converters import group_to_out
from school.services.base import BaseService
from school.services.dto import GroupOut


class GroupService(BaseService):
    """Read-only application service for groups."""

    def find_by_max_student_count(self, max_count: int) -> list[GroupOut]:
        """
        List groups with at most ``max_count`` students (empty groups included).

        :param max_count: Inclusive threshold, ``>= 0``.
        :type max_count: int
        :returns: Groups ordered by id, with their student counts.
        :rtype: list[GroupOut]
        :raises marshmallow.ValidationError: On a negative threshold.
        """
        data = GroupSizeQuerySchema().load({"max_count": max_count})
        with self.ro_uow() as uow:
            rows = uow.groups.find_by_max_student_count(data["max_count"])
            return [group_to_out(group, count) for group, count in rows]

    def list_groups(self) -> list[GroupOut]:
        """List every group with its student count, ordered by id."""
        with self.ro_uow() as uow:
            counts = uow.groups.student_counts()
            return [group_to_out(g, counts.get(g.id, 0)) for g in uow.groups.list()]
