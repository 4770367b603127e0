"""
Base schema model for API requests and responses.

Provides camelCase aliases for the web client, ORM conversion,
UTC datetime serialization and numeric rendering of money amounts.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    FieldSerializationInfo,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_serializer,
    model_validator,
)


def to_camel(string: str) -> str:
    """
    Convert snake_case to camelCase.

    Example:
        >>> to_camel("period_month")
        'periodMonth'
    """
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


def to_naive_utc(dt: datetime | None) -> datetime | None:
    """Convert an aware datetime to naive UTC for storage. Naive values pass through."""
    if dt is not None and dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


_HTTP_URL = TypeAdapter(HttpUrl)


def validate_http_url(url: str | None) -> str | None:
    """Check that url is an absolute http(s) URL and return it as given."""
    if url is None:
        return None
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        raise ValueError("must be an http(s) URL") from None
    return url


def serialize_datetime(dt: datetime | None) -> str | None:
    """
    Serialize datetime to ISO 8601 format with UTC timezone indicator.

    Stored datetimes are naive UTC. Aware values are converted to UTC first.
    """
    if dt is None:
        return None

    return to_naive_utc(dt).isoformat() + "Z"


class HTTPSchemaModel(BaseModel):
    """
    Base model for all HTTP API schemas.

    - camelCase field names on the wire, snake_case accepted on input
    - from_attributes=True so ORM rows validate directly
    - datetimes rendered as UTC with 'Z' suffix in JSON output
    - Decimal amounts rendered as JSON numbers

    Python-mode dumps keep datetime and Decimal values so services can
    hand them to the ORM unchanged.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("*", mode="wrap")
    @classmethod
    def serialize_special_types(cls, value: Any, handler: Any, info: FieldSerializationInfo) -> Any:
        if not info.mode_is_json():
            return handler(value)
        if isinstance(value, datetime):
            return serialize_datetime(value)
        if isinstance(value, Decimal):
            return float(value)
        return handler(value)


class PartialUpdateModel(HTTPSchemaModel):
    """
    Base model for partial updates.

    Omitted fields stay out of model_fields_set and are left untouched by
    services. An explicit null is only accepted for fields listed in
    nullable_fields; every other field rejects it.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self
