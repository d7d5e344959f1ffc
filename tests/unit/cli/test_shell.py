"""Console tests driven through Flask's click test runner."""

from __future__ import annotations

import pytest

from school.cli.shell import COMMANDS, EXIT_KEY, render_menu
from school.services import AssignmentManager, StudentService
from tests.factories.school import CourseFactory, GroupFactory, StudentFactory
from tests.helpers.utils import table_names


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


def _console(runner, *lines: str):
    return runner.invoke(args=["console"], input="\n".join([*lines, EXIT_KEY]) + "\n")


def test_menu_lists_seven_commands():
    menu = render_menu()

    assert len(COMMANDS) == 7
    assert menu.splitlines()[0] == "a. Find all groups with less or equals student count"
    assert menu.splitlines()[-1] == "z. Exit"


class TestConsole:
    def test_exit(self, db, runner):
        result = _console(runner)

        assert result.exit_code == 0, result.output
        assert "Choose from available actions menu:" in result.output

    def test_invalid_letter_is_reprompted(self, db, runner):
        result = _console(runner, "x")

        assert result.exit_code == 0
        assert "is not one of" in result.output

    def test_find_groups_reprompts_non_numeric_count(self, db, runner):
        small = GroupFactory(name="AB-12")
        StudentFactory(group=small)

        result = _console(runner, "a", "abc", "1")

        assert result.exit_code == 0
        assert "is not a valid integer" in result.output
        assert "Group[id=1, name=AB-12, students=1]" in result.output

    def test_add_student(self, db, runner):
        result = _console(runner, "c", "Ann", "Lee")

        assert result.exit_code == 0
        assert "The student added: Student[id=1, name=Ann Lee" in result.output
        assert [s.full_name for s in StudentService().list_students()] == ["Ann Lee"]

    def test_add_student_with_blank_name_reports_invalid_input(self, db, runner):
        result = _console(runner, "c", "   ", "Lee")

        assert result.exit_code == 0
        assert "Invalid input: first_name" in result.output
        assert StudentService().list_students() == []

    def test_delete_unknown_student_keeps_loop_running(self, db, runner):
        result = _console(runner, "d", "99", "c", "Ann", "Lee")

        assert result.exit_code == 0
        assert "Student not found: 99" in result.output
        assert "The student added" in result.output

    def test_attach_and_duplicate(self, db, runner):
        student = StudentFactory()
        course = CourseFactory(name="Mathematics")

        result = _console(
            runner, "e", str(student.id), str(course.id), "e", str(student.id), str(course.id)
        )

        assert result.exit_code == 0
        assert "was added to the course Course[id=1, name=Mathematics]" in result.output
        assert f"Student {student.id} is already assigned to course {course.id}" in result.output

    def test_detach(self, db, runner):
        student = StudentFactory()
        math, art = CourseFactory(name="Mathematics"), CourseFactory(name="Art")
        AssignmentManager().attach(student.id, math.id)
        AssignmentManager().attach(student.id, art.id)

        result = _console(runner, "f", str(student.id), str(math.id))

        assert result.exit_code == 0
        assert "The student is removed from the course. Actual courses:" in result.output
        assert [c.name for c in AssignmentManager().courses_for_student(student.id)] == ["Art"]

    def test_read_failure_without_schema_keeps_loop_running(self, app, runner):
        result = _console(runner, "a", "1", "b", "Mathematics")

        assert result.exit_code == 0, result.output
        assert "The command failed and was rolled back" in result.output
        assert "no such table: groups" in result.output
        assert "no such table: courses" in result.output
        assert result.output.count("Choose from available actions menu:") == 3

    def test_find_students_by_unknown_course(self, db, runner):
        result = _console(runner, "b", "Alchemy")

        assert result.exit_code == 0
        assert "Course not found: Alchemy" in result.output


class TestRunCommand:
    def test_bootstraps_seeds_and_tears_down(self, app, runner):
        result = runner.invoke(
            args=["run", "--groups", "2", "--students", "30", "--seed", "7"],
            input=f"{EXIT_KEY}\n",
        )

        assert result.exit_code == 0, result.output
        assert "Test data generated" in result.output
        assert table_names() == set()

    def test_unreachable_store_is_fatal(self, make_app, tmp_path):
        bad_app = make_app(f"sqlite:///{tmp_path / 'missing' / 'school.db'}")

        result = bad_app.test_cli_runner().invoke(args=["run"], input=f"{EXIT_KEY}\n")

        assert result.exit_code == 1
        assert "Cannot connect to the store" in result.output
        assert "Test data generated" not in result.output
