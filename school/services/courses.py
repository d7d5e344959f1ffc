"""Course lookups behind the console."""

from __future__ import annotations

from school.core.errors import NotFound
from school.services._converters import course_to_out
from school.services.base import BaseService
from school.services.dto import CourseOut


class CourseService(BaseService):
    """Read-only application service for courses."""

    def list_courses(self) -> list[CourseOut]:
        """List every course ordered by id."""
        with self.ro_uow() as uow:
            return [course_to_out(c) for c in uow.courses.list()]

    def get_course(self, course_id: int) -> CourseOut:
        """
        Fetch one course.

        :raises NotFound: If the course does not exist.
        """
        with self.ro_uow() as uow:
            course = uow.courses.get(course_id)
            if course is None:
                raise NotFound("Course", course_id)
            return course_to_out(course)
