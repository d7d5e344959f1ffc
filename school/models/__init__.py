from school.models.assignment import StudentAssignment
from school.models.course import Course
from school.models.group import Group
from school.models.student import Student

__all__ = [
    "Course",
    "Group",
    "Student",
    "StudentAssignment",
]
