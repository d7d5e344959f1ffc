"""
Output DTOs returned by the application services.

Snapshots are built inside the unit of work that read them and are frozen:
nothing returned to the console stays attached to a session.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GroupOut:
    """
    Group snapshot.

    :param id: Group identifier.
    :param name: Group name (``"AB-12"``).
    :param student_count: Enrolled students when the snapshot was taken.
    """

    id: int
    name: str
    student_count: int = 0

    def __str__(self) -> str:
        return f"Group[id={self.id}, name={self.name}, students={self.student_count}]"


@dataclass(frozen=True, slots=True)
class StudentOut:
    """
    Student snapshot.

    :param id: Student identifier.
    :param first_name: First name.
    :param last_name: Last name.
    :param group_id: Group identifier, ``None`` when ungrouped.
    """

    id: int
    first_name: str
    last_name: str
    group_id: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"Student[id={self.id}, name={self.full_name}, group_id={self.group_id}]"


@dataclass(frozen=True, slots=True)
class CourseOut:
    """
    Course snapshot.

    :param id: Course identifier.
    :param name: Course name.
    :param description: Optional description.
    """

    id: int
    name: str
    description: str | None = None

    def __str__(self) -> str:
        return f"Course[id={self.id}, name={self.name}]"


@dataclass(frozen=True, slots=True)
class AssignmentOut:
    """Assignment of a student to a course, with both sides resolved."""

    student: StudentOut
    course: CourseOut

    @property
    def student_id(self) -> int:
        return self.student.id

    @property
    def course_id(self) -> int:
        return self.course.id
