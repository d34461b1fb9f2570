"""
Pydantic schemas for the bookstore API.

JSON on the wire is camelCase (``publishedDate``, ``createdAt``); Python
attributes stay snake_case.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Price = Annotated[float, Field(ge=0)]
Rating = Annotated[float, Field(ge=0, le=5)]


def _as_utc(value: datetime) -> datetime:
    # naive values (date-only input, or read back from SQLite) are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _require_iso8601(value: Any) -> Any:
    # pydantic would otherwise read numbers and numeric strings as Unix timestamps
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValueError("Invalid date format, expected ISO-8601")
    return value


IsoDatetime = Annotated[UtcDatetime, BeforeValidator(_require_iso8601)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    email: str


class AuthResponse(BaseModel):
    user: UserOut
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Books
# ═══════════════════════════════════════════════════════════════════════════════


class BookCreate(_CamelModel):
    title: NonEmptyStr
    author: NonEmptyStr
    category: NonEmptyStr
    price: Price
    rating: Rating
    published_date: IsoDatetime


class BookUpdate(_CamelModel):
    """Partial update: only fields present in the request body are applied."""

    title: Optional[NonEmptyStr] = None
    author: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    price: Optional[Price] = None
    rating: Optional[Rating] = None
    published_date: Optional[IsoDatetime] = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class BookOut(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: uuid.UUID
    title: str
    author: str
    category: str
    price: float
    rating: float
    published_date: UtcDatetime
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class BookListResponse(BaseModel):
    books: List[BookOut]
    pagination: Pagination


class MessageResponse(BaseModel):
    message: str
