"""Marshmallow schemas for group lookups."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class GroupSizeQuerySchema(Schema):
    """Validate the inclusive student-count threshold of a group lookup."""

    max_count = fields.Integer(required=True, validate=validate.Range(min=0))
