from datetime import datetime
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from constants import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH
from errors import EventValidationError


class EventCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, examples=["30 Minute Meeting"])
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH, examples=["Quick intro call"])
    duration: int = Field(..., gt=0, strict=True, examples=[30])
    is_private: bool = Field(True, alias="isPrivate", strict=True)


class EventUpdate(BaseModel):
    """Partial update: only the fields the caller sends are applied"""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    duration: Optional[int] = Field(None, gt=0, strict=True)
    is_private: Optional[bool] = Field(None, alias="isPrivate", strict=True)

    @field_validator("title", "duration", "is_private")
    @classmethod
    def not_null(cls, value):
        # Defaults are not validated, so this only sees values the caller sent
        if value is None:
            raise ValueError("may not be null")
        return value


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    duration: int
    is_private: bool
    user_id: str
    google_event_id: Optional[str] = None
    google_event_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EventSummary(EventRead):
    booking_count: int = 0
    link: Optional[str] = None


class OwnerProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = None
    email: str
    image_url: Optional[str] = None


class EventDetails(EventRead):
    user: OwnerProfile


class UserProfile(BaseModel):
    """User fields as delivered by the identity provider"""

    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    username: Optional[str] = None
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def full_name(self) -> Optional[str]:
        if self.name:
            return self.name
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None


def _format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def parse_event_input(data: Dict[str, Any], schema: Type[BaseModel] = EventCreate) -> Union[EventCreate, EventUpdate]:
    """Validate raw event input against schema, raising EventValidationError on bad shape"""
    if not isinstance(data, dict):
        raise EventValidationError("Event data must be an object")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise EventValidationError(f"Invalid event data: {_format_errors(e)}", errors=e.errors()) from e


def parse_user_profile(data: Dict[str, Any]) -> UserProfile:
    if not isinstance(data, dict):
        raise EventValidationError("User profile must be an object")
    try:
        return UserProfile.model_validate(data)
    except ValidationError as e:
        raise EventValidationError(f"Invalid user profile: {_format_errors(e)}", errors=e.errors()) from e
