# src/clinicsync/schemas/base_schemas.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class BaseSchema(BaseModel):
    """Base schema with common configuration

    Attributes are snake_case; the exchange shape (HTTP bodies, snapshots)
    uses camelCase aliases.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
    )


class EntitySchema(BaseSchema):
    """Base for every synchronized entity, id assigned by the remote store"""

    id: Optional[str] = None


class TimestampMixin(BaseSchema):
    """Mixin for timestamps"""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ResponseBase(BaseSchema):
    """Base response schema"""

    success: bool = True
    message: Optional[str] = None
