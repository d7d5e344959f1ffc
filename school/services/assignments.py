"""
AssignmentManager
=================

Attach/detach lifecycle of the student-course many-to-many relation:

- Attach a student to a course exactly once.
- Detach a student from a course it attends.
- List the courses of a student.

Notes
-----
- Existence and duplicate checks run in the same unit of work as the write,
  so check and write see one consistent state. The store's unique constraint
  on the pair is the backstop should concurrent operators ever be admitted.
- Errors are expressed via :mod:`school.core.errors`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from school.core.errors import DuplicateAssignment, NotFound
from school.models.assignment import StudentAssignment
from school.services._converters import assignment_to_out, course_to_out
from school.services.base import BaseService
from school.services.dto import AssignmentOut, CourseOut
from school.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


class AssignmentManager(BaseService):
    """Application service owning the student-course assignment lifecycle."""

    def attach(self, student_id: int, course_id: int) -> AssignmentOut:
        """
        Assign a student to a course.

        :param student_id: Student identifier.
        :type student_id: int
        :param course_id: Course identifier.
        :type course_id: int
        :returns: The created assignment with student and course resolved.
        :rtype: AssignmentOut
        :raises NotFound: If the student or the course does not exist.
        :raises DuplicateAssignment: If the student already attends the course.
        """

        def _attach(uow: SQLAlchemyUnitOfWork) -> AssignmentOut:
            student = uow.students.get_for_update(student_id)
            if student is None:
                raise NotFound("Student", student_id)
            course = uow.courses.get(course_id)
            if course is None:
                raise NotFound("Course", course_id)

            if uow.assignments.get_pair(student_id, course_id) is not None:
                raise DuplicateAssignment(student_id, course_id)

            try:
                uow.assignments.add(StudentAssignment(student_id=student_id, course_id=course_id))
            except IntegrityError as exc:
                # UNIQUE(student_id, course_id) caught a concurrent insert
                raise DuplicateAssignment(student_id, course_id) from exc

            LOGGER.info(
                "Student attached to course",
                extra={"student_id": student_id, "course_id": course_id},
            )
            return assignment_to_out(student, course)

        return self.transact(_attach)

    def detach(self, student_id: int, course_id: int) -> list[CourseOut]:
        """
        Remove a student from one of its courses.

        :param student_id: Student identifier.
        :type student_id: int
        :param course_id: Course identifier.
        :type course_id: int
        :returns: Courses the student still attends, ordered by course id.
        :rtype: list[CourseOut]
        :raises NotFound: If the student does not attend the course.
        """

        def _detach(uow: SQLAlchemyUnitOfWork) -> list[CourseOut]:
            if uow.assignments.get_pair(student_id, course_id) is None:
                raise NotFound("Assignment", f"student {student_id} / course {course_id}")

            uow.assignments.remove(student_id, course_id)
            LOGGER.info(
                "Student detached from course",
                extra={"student_id": student_id, "course_id": course_id},
            )
            return [course_to_out(c) for c in uow.courses.find_by_student(student_id)]

        return self.transact(_detach)

    def courses_for_student(self, student_id: int) -> list[CourseOut]:
        """
        List the courses a student attends, ordered by course id.

        :param student_id: Student identifier.
        :type student_id: int
        :returns: Assigned courses (possibly empty).
        :rtype: list[CourseOut]
        :raises NotFound: If the student does not exist.
        """
        with self.ro_uow() as uow:
            if uow.students.get(student_id) is None:
                raise NotFound("Student", student_id)
            return [course_to_out(c) for c in uow.courses.find_by_student(student_id)]
