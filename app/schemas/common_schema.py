from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base for request/response models
    - camelCase on the wire, snake_case in Python
    - readable from ORM objects
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class DataResponse(BaseModel, Generic[T]):
    """
    Success envelope: {"data": ..., "message": ...}
    """
    data: Optional[T] = Field(None, description="Payload")
    message: str = Field("ok", description="Result message")


class MessageResponse(BaseModel):
    """
    Envelope without payload
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "Signed-out successfully!"}
        },
    )

    message: str = Field(..., description="Result message")
