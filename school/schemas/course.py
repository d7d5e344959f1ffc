"""Marshmallow schemas for course lookups."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate


class CourseNameQuerySchema(Schema):
    """Validate a course-name lookup (surrounding whitespace is ignored)."""

    course_name = fields.String(required=True, validate=validate.Length(min=1, max=64))

    @pre_load
    def strip_name(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        value = data.get("course_name")
        if isinstance(value, str):
            data = {**data, "course_name": value.strip()}
        return data
