"""
StudentService
==============

Student use cases behind the console: add, delete, list, and look up the
students of a course.

Notes
-----
- Input is validated with marshmallow schemas before any unit of work opens;
  invalid input raises :class:`marshmallow.ValidationError`.
- Deleting a student removes its assignments through the store's cascade.
"""

from __future__ import annotations

import logging

from school.core.errors import NotFound
from school.models.student import Student
from school.schemas import CourseNameQuerySchema, StudentCreateSchema
from school.services._converters import student_to_out
from school.services.base import BaseService
from school.services.dto import StudentOut
from school.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


class StudentService(BaseService):
    """Application service for the ``Student`` aggregate."""

    def add_student(
        self, first_name: str, last_name: str, group_id: int | None = None
    ) -> StudentOut:
        """
        Create a student, optionally enrolled in a group.

        :returns: The persisted student.
        :rtype: StudentOut
        :raises marshmallow.ValidationError: On blank or oversized names.
        :raises NotFound: If ``group_id`` does not exist.
        """
        data = StudentCreateSchema().load(
            {"first_name": first_name, "last_name": last_name, "group_id": group_id}
        )

        def _add(uow: SQLAlchemyUnitOfWork) -> StudentOut:
            if data["group_id"] is not None and uow.groups.get(data["group_id"]) is None:
                raise NotFound("Group", data["group_id"])
            student = uow.students.add(
                Student(
                    first_name=data["first_name"],
                    last_name=data["last_name"],
                    group_id=data["group_id"],
                )
            )
            LOGGER.info("Student added", extra={"student_id": student.id})
            return student_to_out(student)

        return self.transact(_add)

    def delete_student(self, student_id: int) -> StudentOut:
        """
        Delete a student together with its course assignments.

        :returns: Snapshot of the deleted student.
        :rtype: StudentOut
        :raises NotFound: If the student does not exist.
        """

        def _delete(uow: SQLAlchemyUnitOfWork) -> StudentOut:
            student = uow.students.get(student_id)
            if student is None:
                raise NotFound("Student", student_id)
            snapshot = student_to_out(student)
            uow.students.delete(student)
            LOGGER.info("Student deleted", extra={"student_id": student_id})
            return snapshot

        return self.transact(_delete)

    def list_students(self) -> list[StudentOut]:
        """List every student ordered by id."""
        with self.ro_uow() as uow:
            return [student_to_out(s) for s in uow.students.list()]

    def find_by_course_name(self, course_name: str) -> list[StudentOut]:
        """
        List students attending the course with the given name.

        :raises marshmallow.ValidationError: On a blank name.
        :raises NotFound: If no course has that name.
        """
        data = CourseNameQuerySchema().load({"course_name": course_name})
        with self.ro_uow() as uow:
            if uow.courses.get_by_name(data["course_name"]) is None:
                raise NotFound("Course", data["course_name"])
            return [
                student_to_out(s) for s in uow.students.find_by_course_name(data["course_name"])
            ]
