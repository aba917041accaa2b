"""Shared schema base classes."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged as camelCase JSON and readable from ORM objects."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ErrorResponse(BaseModel):
    """Error body returned by every failing route."""

    error: str
