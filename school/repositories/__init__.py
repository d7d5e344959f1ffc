"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from school.repositories.assignment import StudentAssignmentRepository
from school.repositories.base import BaseRepository
from school.repositories.course import CourseRepository
from school.repositories.group import GroupRepository
from school.repositories.student import StudentRepository

__all__ = [
    # Base
    "BaseRepository",
    # Domain
    "GroupRepository",
    "StudentRepository",
    "CourseRepository",
    "StudentAssignmentRepository",
]
