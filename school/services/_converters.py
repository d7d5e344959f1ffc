from __future__ import annotations

from school.models.course import Course
from school.models.group import Group
from school.models.student import Student

from .dto import AssignmentOut, CourseOut, GroupOut, StudentOut


def group_to_out(row: Group, student_count: int = 0) -> GroupOut:
    return GroupOut(id=row.id, name=row.name, student_count=student_count)


def student_to_out(row: Student) -> StudentOut:
    return StudentOut(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        group_id=row.group_id,
    )


def course_to_out(row: Course) -> CourseOut:
    return CourseOut(id=row.id, name=row.name, description=row.description)


def assignment_to_out(student: Student, course: Course) -> AssignmentOut:
    return AssignmentOut(student=student_to_out(student), course=course_to_out(course))
