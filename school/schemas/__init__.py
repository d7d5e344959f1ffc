"""Input schemas applied before operator input reaches a unit of work."""

from __future__ import annotations

from school.schemas.course import CourseNameQuerySchema
from school.schemas.group import GroupSizeQuerySchema
from school.schemas.student import StudentCreateSchema

__all__ = ["CourseNameQuerySchema", "GroupSizeQuerySchema", "StudentCreateSchema"]
