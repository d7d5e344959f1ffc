"""Mixins shared by the registry models."""

from __future__ import annotations

from sqlalchemy import inspect


class ReprMixin:
    """``<ClassName id=...>`` built from the row identity (composite keys as a tuple)."""

    def __repr__(self) -> str:
        identity = inspect(self).identity
        if identity is None:
            key: object = "pending"
        elif len(identity) == 1:
            key = identity[0]
        else:
            key = identity
        return f"<{type(self).__name__} id={key}>"
