"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from school.repositories import (
        CourseRepository,
        GroupRepository,
        StudentAssignmentRepository,
        StudentRepository,
    )


class UnitOfWork(ABC):
    """
    One transactional scope over one store connection.

    Responsibilities:
    - Acquire the connection on enter and release it on every exit path.
    - Expose repositories bound to that connection's transaction.
    - Commit on success, rollback on error.
    """

    groups: GroupRepository
    students: StudentRepository
    courses: CourseRepository
    assignments: StudentAssignmentRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
    @abstractmethod
    def close(self) -> None: ...
