"""
Base model and shared data transfer objects.

Every request and response body exchanged with the provider is a pydantic
model deriving from SerializedModel. Field names are snake_case in Python
and camelCase on the wire.

This module provides:
- SerializedModel: Base class handling aliases and body encoding
- Event: A single event as stored in aggregates and returned in feeds
"""

from __future__ import annotations

from typing import Any, ClassVar, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class SerializedModel(BaseModel):
    """
    Base class for provider DTOs.

    Subclasses that set ``omit_empty = True`` leave fields still holding
    their default value out of the encoded body, so the provider applies its
    own defaults. Models with ``omit_empty = False`` always send every field.

    Unknown fields in responses are ignored. A JSON null sent for a field
    that has a non-None default (an empty list, an empty string) decodes
    as that default.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    omit_empty: ClassVar[bool] = True

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)

    def to_json(self) -> bytes:
        """Encode this model as a compact JSON request body."""
        return self.model_dump_json(
            by_alias=True,
            exclude_defaults=self.omit_empty,
        ).encode("utf-8")


class Event(SerializedModel):
    """
    An event as stored by the provider.

    Attributes:
        event_id: Unique identifier of the event (UUID string)
        event_type: Type name of the event (e.g., 'PaymentProcessed')
        data: Arbitrary JSON payload
        encrypted_data: Client-side encrypted payload, if any

    Example:
        >>> event = Event.new("PaymentProcessed", {"amount": 1000})
        >>> event.event_type
        'PaymentProcessed'
    """

    event_id: str = ""
    event_type: str = ""
    data: Any = None
    encrypted_data: str = ""

    @classmethod
    def new(cls, event_type: str, data: Any = None, event_id: str | None = None) -> Self:
        """Create an event with a freshly generated event_id."""
        return cls(
            event_id=event_id or str(uuid4()),
            event_type=event_type,
            data=data,
        )


__all__ = [
    "SerializedModel",
    "Event",
]
