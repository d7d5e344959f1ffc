"""Unit tests for JSON logging and command correlation."""

from __future__ import annotations

import io
import json
import logging

from school.core.logger import command_scope, configure_logging, current_command_id


def _records(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_records_carry_command_scope():
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    logger = logging.getLogger("school.test")

    with command_scope("attach") as command_id:
        assert current_command_id() == command_id
        logger.info("inside", extra={"elapsed_ms": 1.5, "student_id": 3})
    logger.info("outside")

    inside, outside = _records(stream)
    assert inside["command_id"] == command_id
    assert inside["command"] == "attach"
    assert inside["elapsed_ms"] == 1.5
    assert inside["student_id"] == 3
    assert outside["command_id"] is None
    assert current_command_id() is None
    configure_logging("WARNING")


def test_level_filters_records():
    stream = io.StringIO()
    configure_logging("warning", stream=stream)

    logging.getLogger("school.test").info("hidden")
    logging.getLogger("school.test").warning("shown")

    assert [r["message"] for r in _records(stream)] == ["shown"]
    configure_logging("WARNING")
