"""
Pydantic schemas for concert-related request/response validation.
Field names go over the wire in camelCase.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ConcertCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., max_length=1000)
    seat: int = Field(..., gt=0)


class ConcertResponse(CamelModel):
    id: int
    name: str
    description: str
    seat: int
    created_at: datetime
    updated_at: datetime


class ConcertWithStatsResponse(ConcertResponse):
    reserved_count: int
    available_seats: int


class MessageResponse(BaseModel):
    message: str
