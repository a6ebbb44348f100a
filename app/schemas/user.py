# File: app/schemas/user.py

from datetime import date, datetime
from typing import Annotated, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from app.core.config import settings
from app.models.user import UserType

# Upper bound of the Integer column
MAX_INT = 2**31 - 1


def _check_email(v: str) -> str:
    # Syntax check only; the address is stored exactly as submitted
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from exc
    return v


Email = Annotated[str, Field(max_length=255), AfterValidator(_check_email)]
Text = Optional[Annotated[str, Field(max_length=255)]]


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Email
    type: UserType = UserType.REGULAR
    birth_date: Optional[date] = None
    country: Text = None
    state: Text = None
    city: Text = None
    address: Text = None
    email_subscription: Optional[bool] = None
    number_of_languages: Optional[int] = Field(None, ge=0, le=MAX_INT)


class UserCreate(UserBase):
    password: str = Field(..., min_length=settings.password_min_length)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password cannot be longer than 72 bytes")
        return v


class UserRead(UserBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserFilters(BaseModel):
    """
    Fields that may be used to filter the user listing.

    Anything else in the query string is rejected instead of being handed to
    the database.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    type: Optional[UserType] = None
    birth_date: Optional[date] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    email_subscription: Optional[bool] = None
    number_of_languages: Optional[int] = Field(None, le=MAX_INT)

    def criteria(self) -> dict:
        return self.model_dump(exclude_none=True)


class UserPage(BaseModel):
    users: List[UserRead]
    count: int
    page: int
    limit: int
    total_pages: int
    previous_page: Optional[int] = None
    next_page: Optional[int] = None


class ErrorResponse(BaseModel):
    message: str
    internal_code: str
