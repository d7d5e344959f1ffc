"""Factories for Group, Student, Course and StudentAssignment."""

from __future__ import annotations

import string

import factory

from school.models import Course, Group, Student, StudentAssignment
from tests.factories import BaseFactory


def _group_name(n: int) -> str:
    letters = string.ascii_uppercase
    return f"{letters[n // 26 % 26]}{letters[n % 26]}-{n % 100:02d}"


class GroupFactory(BaseFactory):
    """Build persisted :class:`school.models.Group` instances."""

    class Meta:
        model = Group

    id = None
    name = factory.Sequence(_group_name)


class StudentFactory(BaseFactory):
    """Build persisted :class:`school.models.Student` instances."""

    class Meta:
        model = Student

    id = None
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")


class CourseFactory(BaseFactory):
    """Build persisted :class:`school.models.Course` instances."""

    class Meta:
        model = Course

    id = None
    name = factory.Sequence(lambda n: f"Course {n:03d}")
    description = factory.Faker("sentence", nb_words=6)


class StudentAssignmentFactory(BaseFactory):
    """Build persisted :class:`school.models.StudentAssignment` pairs."""

    class Meta:
        model = StudentAssignment

    student = factory.SubFactory(StudentFactory)
    course = factory.SubFactory(CourseFactory)
