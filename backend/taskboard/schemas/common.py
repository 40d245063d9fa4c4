"""Shared response envelopes and the camelCase wire model base."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from taskboard.core.time import ensure_utc

DataT = TypeVar("DataT")

# Validation errors of this type carry a complete, user-facing message.
FIELD_ERROR = "field_error"


def field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError(FIELD_ERROR, message)


def max_length(limit: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) > limit:
            raise field_error(message)
        return value

    return AfterValidator(check)


def non_negative(message: str) -> AfterValidator:
    def check(value: float) -> float:
        if value < 0:
            raise field_error(message)
        return value

    return AfterValidator(check)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreateModel(ApiModel):
    """Create payload whose required fields report their own message when absent."""

    required_messages: ClassVar[dict[str, str]] = {}

    @model_validator(mode="after")
    def require_fields(self) -> CreateModel:
        missing = [
            message
            for name, message in self.required_messages.items()
            if _is_blank(getattr(self, name))
        ]
        if missing:
            raise field_error(", ".join(missing))
        return self


class PatchModel(ApiModel):
    """Partial-update payload: omitted fields are left alone, ``null`` clears
    only the fields listed in ``nullable_fields``."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset()
    required_messages: ClassVar[dict[str, str]] = {}

    @model_validator(mode="after")
    def reject_null_required(self) -> PatchModel:
        for name in sorted(self.model_fields_set):
            value = getattr(self, name)
            if name in self.required_messages and _is_blank(value):
                raise field_error(self.required_messages[name])
            if value is None and name not in self.nullable_fields:
                alias = type(self).model_fields[name].alias or name
                raise field_error(f"{alias} cannot be null")
        return self

    def updates(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def normalize_tags(value: list[str]) -> list[str]:
    """Trim tags, drop blanks and duplicates while keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in value:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


Tags = Annotated[list[str], AfterValidator(normalize_tags)]
UtcDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class Envelope(ApiModel, Generic[DataT]):
    success: bool = True
    message: str | None = Field(default=None, exclude_if=lambda value: value is None)
    data: DataT


class CountEnvelope(Envelope[DataT], Generic[DataT]):
    count: int


class PageEnvelope(Envelope[DataT], Generic[DataT]):
    count: int
    total: int
    page: int
    pages: int


class EmptyData(ApiModel):
    pass


class HealthRead(ApiModel):
    success: bool = True
    status: str = "ok"
    message: str = "API is running"
    timestamp: UtcDateTime


class ErrorRead(ApiModel):
    success: bool = False
    message: str
    stack: str | None = None
