"""Interactive operator console.

The console is the only layer that turns failures into operator messages and
keeps the command loop going. Every handler receives an explicit
:class:`ShellContext`; nothing is kept in module globals.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, NamedTuple

import click
from flask import current_app
from flask.cli import with_appcontext
from marshmallow import ValidationError

from school.core.errors import (
    ConnectivityFailure,
    SchemaError,
    SchoolError,
    TransactionFailure,
)
from school.core.logger import command_scope
from school.core.schema import SchemaLifecycle
from school.seeds import seed_data
from school.services import AssignmentManager, CourseService, GroupService, StudentService

LOGGER = logging.getLogger(__name__)

EXIT_KEY = "z"


@dataclass(slots=True)
class ShellContext:
    """Services and I/O callables shared by the command handlers."""

    groups: GroupService
    students: StudentService
    courses: CourseService
    assignments: AssignmentManager
    echo: Callable[..., Any] = click.echo
    prompt: Callable[..., Any] = click.prompt

    @classmethod
    def create(cls, **io: Callable[..., Any]) -> ShellContext:
        """Build a context with fresh services bound to the application engine."""
        return cls(
            groups=GroupService(),
            students=StudentService(),
            courses=CourseService(),
            assignments=AssignmentManager(),
            **io,
        )

    def ask_id(self, text: str) -> int:
        return int(self.prompt(text, type=click.IntRange(min=1)))

    def echo_rows(self, title: str, rows: Iterable[object]) -> None:
        self.echo(title)
        lines = [f"  {row}" for row in rows]
        self.echo("\n".join(lines) if lines else "  (none)")


# --------------------------------------------------------------------------- #
# Command handlers
# --------------------------------------------------------------------------- #


def find_groups_by_max_size(ctx: ShellContext) -> None:
    max_count = ctx.prompt("Enter student count", type=click.IntRange(min=0))
    groups = ctx.groups.find_by_max_student_count(max_count)
    ctx.echo_rows("Groups with less or equals student count:", groups)


def find_students_by_course_name(ctx: ShellContext) -> None:
    ctx.echo_rows("Available courses:", ctx.courses.list_courses())
    course_name = ctx.prompt("Enter course name", type=str)
    students = ctx.students.find_by_course_name(course_name)
    ctx.echo_rows(f"Students related to course {course_name.strip()!r}:", students)


def add_student(ctx: ShellContext) -> None:
    first_name = ctx.prompt("Enter first name of the student", type=str)
    last_name = ctx.prompt("Enter last name of the student", type=str)
    student = ctx.students.add_student(first_name, last_name)
    ctx.echo(f"The student added: {student}")


def delete_student(ctx: ShellContext) -> None:
    ctx.echo_rows("List of active students:", ctx.students.list_students())
    student_id = ctx.ask_id("Enter STUDENT_ID of the student to be deleted")
    student = ctx.students.delete_student(student_id)
    ctx.echo(f"Student [{student}] has been deleted from the list of active students")


def attach_student_to_course(ctx: ShellContext) -> None:
    ctx.echo_rows("Here is the list of active students:", ctx.students.list_students())
    student_id = ctx.ask_id("Enter STUDENT_ID of the student to be updated")
    ctx.echo_rows("Here is the list of courses:", ctx.courses.list_courses())
    course_id = ctx.ask_id("Enter COURSE_ID of the course to assign to the chosen student")
    assignment = ctx.assignments.attach(student_id, course_id)
    ctx.echo(f"The student {assignment.student} was added to the course {assignment.course}")


def detach_student_from_course(ctx: ShellContext) -> None:
    ctx.echo_rows("Here is the list of active students:", ctx.students.list_students())
    student_id = ctx.ask_id("Enter STUDENT_ID of the student to be updated")
    courses = ctx.assignments.courses_for_student(student_id)
    ctx.echo_rows("Here is the list of active courses for the student:", courses)
    course_id = ctx.ask_id("Enter COURSE_ID of the course the student should be removed from")
    remaining = ctx.assignments.detach(student_id, course_id)
    ctx.echo_rows("The student is removed from the course. Actual courses:", remaining)


class Command(NamedTuple):
    name: str
    title: str
    handler: Callable[[ShellContext], None] | None


COMMANDS: dict[str, Command] = {
    "a": Command(
        "find-groups", "Find all groups with less or equals student count", find_groups_by_max_size
    ),
    "b": Command(
        "find-students",
        "Find all students related to course with given name",
        find_students_by_course_name,
    ),
    "c": Command("add-student", "Add new student", add_student),
    "d": Command("delete-student", "Delete student by STUDENT_ID", delete_student),
    "e": Command("attach", "Add a student to the course (from a list)", attach_student_to_course),
    "f": Command(
        "detach",
        "Remove the student from one of his or her courses",
        detach_student_from_course,
    ),
    EXIT_KEY: Command("exit", "Exit", None),
}


def render_menu() -> str:
    return "\n".join(f"{key}. {command.title}" for key, command in COMMANDS.items())


# --------------------------------------------------------------------------- #
# Loop
# --------------------------------------------------------------------------- #


def dispatch(ctx: ShellContext, command: Command) -> None:
    """Run one handler and report any recoverable failure to the operator."""
    if command.handler is None:
        return
    try:
        command.handler(ctx)
    except ValidationError as exc:
        ctx.echo(f"Invalid input: {_format_messages(exc.messages)}")
    except ConnectivityFailure as exc:
        ctx.echo(f"{exc}. Re-issue the command to try again.")
    except TransactionFailure as exc:
        ctx.echo(f"The command failed and was rolled back: {exc.cause}")
    except SchoolError as exc:
        ctx.echo(str(exc))


def run_console(ctx: ShellContext) -> None:
    """Process operator commands one at a time until ``z`` is chosen."""
    while True:
        ctx.echo("Choose from available actions menu:\n" + render_menu())
        choice = ctx.prompt(
            "Please provide one of the expected answers",
            type=click.Choice(list(COMMANDS), case_sensitive=False),
        ).lower()
        if choice == EXIT_KEY:
            return
        command = COMMANDS[choice]
        with command_scope(command.name):
            dispatch(ctx, command)


def _format_messages(messages: Any) -> str:
    if isinstance(messages, dict):
        return "; ".join(f"{field}: {_format_messages(msg)}" for field, msg in messages.items())
    if isinstance(messages, (list, tuple)):
        return ", ".join(str(m) for m in messages)
    return str(messages)


# --------------------------------------------------------------------------- #
# Click commands
# --------------------------------------------------------------------------- #


@click.command("console")
@with_appcontext
def console_command() -> None:
    """Run the operator menu against an existing schema."""
    run_console(ShellContext.create())


@click.command("run")
@click.option("--groups", type=click.IntRange(min=0), default=None, help="Groups to generate.")
@click.option("--students", type=click.IntRange(min=0), default=None, help="Students to generate.")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible data.")
@with_appcontext
def run_command(groups: int | None, students: int | None, seed: int | None) -> None:
    """Bootstrap the schema, generate test data, serve the menu, tear down on exit."""
    config = current_app.config
    groups = config.get("SEED_GROUPS", 10) if groups is None else groups
    students = config.get("SEED_STUDENTS", 200) if students is None else students
    seed = config.get("SEED") if seed is None else seed

    try:
        with SchemaLifecycle().managed():
            try:
                seed_data.run_all(groups=groups, students=students, rng=random.Random(seed))
            except TransactionFailure as exc:
                raise click.ClickException(f"Seeding failed: {exc.cause}") from exc
            click.echo("Test data generated")
            run_console(ShellContext.create())
    except (ConnectivityFailure, SchemaError) as exc:
        LOGGER.error("Startup failed: %s", exc)
        raise click.ClickException(str(exc)) from exc
