"""Randomized test data for a freshly bootstrapped schema.

Two units of work populate the store:

1. groups, courses and students (students spread over groups);
2. course assignments for every student.
"""

from __future__ import annotations

import logging
import random
import string

from school.models.course import Course
from school.models.group import Group
from school.models.student import Student
from school.uow import SQLAlchemyUnitOfWork, TransactionExecutor

LOGGER = logging.getLogger(__name__)

FIRST_NAMES: list[str] = [
    "Ann", "Boris", "Clara", "Dmytro", "Emma", "Felix", "Greta", "Hugo", "Iryna", "Jonas",
    "Kira", "Leon", "Maria", "Nazar", "Olga", "Pavlo", "Rita", "Sofia", "Taras", "Vera",
]

LAST_NAMES: list[str] = [
    "Lee", "Bondar", "Fischer", "Garcia", "Hoffman", "Ivanenko", "Jensen", "Kovalenko",
    "Lewis", "Melnyk", "Novak", "Olsen", "Petrenko", "Quinn", "Rossi", "Shevchenko",
    "Tkachenko", "Usyk", "Weber", "Zhuk",
]

COURSE_FIXTURES: list[dict[str, str]] = [
    {"name": "Mathematics", "description": "Algebra, geometry and calculus"},
    {"name": "Biology", "description": "Living organisms and their environment"},
    {"name": "Chemistry", "description": "Substances and their reactions"},
    {"name": "Physics", "description": "Matter, energy and motion"},
    {"name": "History", "description": "Events of the past and their causes"},
    {"name": "Geography", "description": "Landscapes, climates and peoples"},
    {"name": "Literature", "description": "Reading and analysing written works"},
    {"name": "Computer Science", "description": "Algorithms and programming"},
    {"name": "Art", "description": "Drawing, painting and art history"},
    {"name": "Music", "description": "Theory and practice of music"},
]

MIN_GROUP_SIZE = 10
MAX_GROUP_SIZE = 30
MIN_COURSES_PER_STUDENT = 1
MAX_COURSES_PER_STUDENT = 3


def group_name(rng: random.Random) -> str:
    """Return a name made of two capital letters, a hyphen and two digits."""
    letters = "".join(rng.choices(string.ascii_uppercase, k=2))
    digits = "".join(rng.choices(string.digits, k=2))
    return f"{letters}-{digits}"


def generate_group_names(count: int, rng: random.Random) -> list[str]:
    """Return ``count`` distinct group names."""
    names: list[str] = []
    seen: set[str] = set()
    while len(names) < count:
        name = group_name(rng)
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def distribute_students(
    student_count: int, group_count: int, rng: random.Random
) -> list[int | None]:
    """
    Pick a group slot (0-based) for every student, or ``None``.

    Each group in turn draws a size between 10 and 30; it receives that many
    of the remaining students, or none when fewer remain. Students left over
    stay without a group.

    :returns: One entry per student, in student order.
    :rtype: list[int | None]
    """
    order = list(range(student_count))
    rng.shuffle(order)
    slots: list[int | None] = [None] * student_count
    cursor = 0
    for group_index in range(group_count):
        size = rng.randint(MIN_GROUP_SIZE, MAX_GROUP_SIZE)
        if student_count - cursor < size:
            continue
        for student_index in order[cursor : cursor + size]:
            slots[student_index] = group_index
        cursor += size
    return slots


def pick_courses(course_ids: list[int], rng: random.Random) -> list[int]:
    """Pick 1-3 distinct course ids."""
    upper = min(MAX_COURSES_PER_STUDENT, len(course_ids))
    if upper == 0:
        return []
    k = rng.randint(min(MIN_COURSES_PER_STUDENT, upper), upper)
    return sorted(rng.sample(course_ids, k))


def generate_data(
    uow: SQLAlchemyUnitOfWork, *, groups: int, students: int, rng: random.Random
) -> dict[str, dict[str, int]]:
    """Insert groups, courses and students inside ``uow``."""
    group_rows = [Group(name=name) for name in generate_group_names(groups, rng)]
    for row in group_rows:
        uow.groups.add(row)

    for fixture in COURSE_FIXTURES:
        uow.courses.add(Course(name=fixture["name"], description=fixture["description"]))

    slots = distribute_students(students, len(group_rows), rng)
    for slot in slots:
        uow.session.add(
            Student(
                first_name=rng.choice(FIRST_NAMES),
                last_name=rng.choice(LAST_NAMES),
                group_id=group_rows[slot].id if slot is not None else None,
            )
        )
    uow.students.flush()

    LOGGER.debug("Generated %d groups, %d students", len(group_rows), len(slots))
    return {
        "groups": {"created": len(group_rows)},
        "courses": {"created": len(COURSE_FIXTURES)},
        "students": {"created": len(slots)},
    }


def assign_students(uow: SQLAlchemyUnitOfWork, *, rng: random.Random) -> dict[str, dict[str, int]]:
    """Give every student 1-3 random courses inside ``uow``."""
    course_ids = [course.id for course in uow.courses.list()]
    pairs = [
        (student.id, course_id)
        for student in uow.students.list()
        for course_id in pick_courses(course_ids, rng)
    ]
    created = uow.assignments.add_many(pairs)
    LOGGER.debug("Assigned %d student-course pairs", created)
    return {"students_courses": {"created": created}}


def run_all(
    executor: TransactionExecutor | None = None,
    *,
    groups: int = 10,
    students: int = 200,
    rng: random.Random | None = None,
) -> dict[str, dict[str, int]]:
    """
    Seed the store in two units of work and return a per-table summary.

    :param executor: Executor to run the units of work with.
    :param groups: Number of groups to create.
    :param students: Number of students to create.
    :param rng: Random source; pass a seeded one for reproducible data.
    :raises TransactionFailure: If either unit of work fails (it is rolled back).
    """
    executor = executor or TransactionExecutor()
    rng = rng or random.Random()

    summary = executor.run(
        lambda uow: generate_data(uow, groups=groups, students=students, rng=rng)
    )
    summary.update(executor.run(lambda uow: assign_students(uow, rng=rng)))
    LOGGER.info("Test data generated")
    return summary
