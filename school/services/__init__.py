"""Service layer public API.

This package exposes the application services so callers can import from
:mod:`school.services` without knowing internal structure.

Re-exports
----------
- Base primitives: :class:`BaseService`
- Snapshots: :class:`GroupOut`, :class:`StudentOut`, :class:`CourseOut`,
  :class:`AssignmentOut`
- Services: :class:`AssignmentManager`, :class:`StudentService`,
  :class:`GroupService`, :class:`CourseService`
"""

from __future__ import annotations

from school.services.assignments import AssignmentManager
from school.services.base import BaseService
from school.services.courses import CourseService
from school.services.dto import AssignmentOut, CourseOut, GroupOut, StudentOut
from school.services.groups import GroupService
from school.services.students import StudentService

__all__ = [
    "BaseService",
    "AssignmentManager",
    "StudentService",
    "GroupService",
    "CourseService",
    "AssignmentOut",
    "CourseOut",
    "GroupOut",
    "StudentOut",
]
