"""
Failure taxonomy shared by repositories, units of work, services and the console.

These exceptions are **framework-agnostic**: they never depend on Flask or
click. Only the console layer (``school.cli.shell``) turns them into
operator-facing messages and keeps the command loop going.

``retryable`` separates failures worth re-issuing later (the store was
unreachable) from failures that are final for the command that raised them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class SchoolError(Exception):
    """
    Base class for every failure raised by the school registry.

    Notes
    -----
    - Subclasses are raised from repositories, units of work and services.
    - No operation retries automatically; ``retryable`` only informs the
      operator whether re-issuing the command can succeed.
    """

    retryable: ClassVar[bool] = False


# --------------------------------------------------------------------------- #
# Infrastructure failures
# --------------------------------------------------------------------------- #


class ConnectivityFailure(SchoolError):
    """
    Raised when the store is unreachable or the driver rejects the connection.

    :param target: Store URL with the password masked.
    :type target: str
    """

    retryable = True

    def __init__(self, target: str) -> None:
        super().__init__(f"Cannot connect to the store at {target}")
        self.target = target


class TransactionFailure(SchoolError):
    """
    Raised when a unit of work fails and has been rolled back.

    The original failure is kept on :attr:`cause` and as ``__cause__``.

    :param cause: Exception raised inside the unit of work.
    :type cause: BaseException
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Transaction rolled back: {cause}")
        self.cause = cause

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return bool(getattr(self.cause, "retryable", False))


class SchemaError(SchoolError):
    """Raised when the schema cannot be created; the process must not continue."""


# --------------------------------------------------------------------------- #
# Domain failures (final for the current command)
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class NotFound(SchoolError):
    """
    Raised when a referenced student, course, group or assignment does not exist.

    :param entity: Entity name (e.g., "Student").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True, eq=False)
class DuplicateAssignment(SchoolError):
    """
    Raised when a student is attached to a course they already attend.

    :param student_id: Student identifier.
    :type student_id: int
    :param course_id: Course identifier.
    :type course_id: int
    """

    student_id: int
    course_id: int

    def __str__(self) -> str:
        return f"Student {self.student_id} is already assigned to course {self.course_id}"


#: Failures a caller can act on; they surface under their own type.
DOMAIN_FAILURES: tuple[type[SchoolError], ...] = (NotFound, DuplicateAssignment)


__all__ = [
    "SchoolError",
    "ConnectivityFailure",
    "TransactionFailure",
    "SchemaError",
    "NotFound",
    "DuplicateAssignment",
    "DOMAIN_FAILURES",
]
