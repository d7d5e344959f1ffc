"""Marshmallow schemas validating student input."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate

from school.models.student import NAME_MAX_LENGTH


class StudentCreateSchema(Schema):
    """Validate a new student; names are stripped before length checks."""

    first_name = fields.String(
        required=True, validate=validate.Length(min=1, max=NAME_MAX_LENGTH)
    )
    last_name = fields.String(
        required=True, validate=validate.Length(min=1, max=NAME_MAX_LENGTH)
    )
    group_id = fields.Integer(
        load_default=None, allow_none=True, validate=validate.Range(min=1)
    )

    @pre_load
    def strip_names(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
        }
