"""
Domain models for the message service.

Defines the single record exchanged over HTTP and stored in the ``message``
table: a text value that is both the row's primary key and its payload.
"""
from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError


class Message(BaseModel):
    """
    Representation of a single row in the `message` table.
    """

    value: str = Field("", description="Text value; also the primary key.")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @classmethod
    def from_body(cls, body: bytes, strict: bool = True) -> "Message":
        """
        Decode a request body into a Message.

        An empty body yields an empty value. A body that is not a JSON object
        with a string ``value`` raises ``ValidationError`` when ``strict`` is
        set, and otherwise degrades to an empty value.
        """
        if not body.strip():
            return cls()
        try:
            return cls.model_validate_json(body)
        except ValidationError:
            if strict:
                raise
            return cls()


__all__ = ["Message"]
