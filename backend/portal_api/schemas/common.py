from datetime import datetime
from typing import Annotated, ClassVar, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, PlainSerializer, ValidationInfo, field_validator

from portal_api.models.base import as_utc

# Accepts any UUID spelling on input, dumps as the canonical lowercase string stored in the DB
UUIDStr = Annotated[UUID, PlainSerializer(lambda v: str(v), return_type=str)]


class WriteModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    @field_validator("*")
    @classmethod
    def datetimes_to_utc(cls, v):
        # Timestamp columns only accept timezone-aware values
        if isinstance(v, datetime):
            return as_utc(v)
        return v


class PartialUpdate(WriteModel):
    """Base for update payloads: every field optional, only fields sent are applied.

    Sending ``null`` explicitly is only allowed for columns listed in ``nullable_fields``.
    """

    nullable_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        if v is None and info.field_name not in cls.nullable_fields:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
