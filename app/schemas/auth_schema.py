from datetime import date
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator
from pydantic import ConfigDict

from app.schemas.common_schema import CamelModel

MINIMUM_AGE = 18


def age_on(birthday: date, today: date) -> int:
    """
    Age in whole years on the given day
    """
    had_birthday = (today.month, today.day) >= (birthday.month, birthday.day)
    return today.year - birthday.year - (0 if had_birthday else 1)


# ─── auth request schemas ─────────────────────────────────────────────────

class SignUpRequest(CamelModel):
    """
    Sign-up request
    - every field is required; birthday must give an age of at least 18
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "A",
                "lastName":  "B",
                "userName":  "ab1",
                "email":     "a@b.com",
                "password":  "x",
                "birthday":  "2000-01-01",
                "bio":       "hi",
            }
        },
    )

    first_name: str      = Field(..., min_length=1, description="first name is required.")
    last_name:  str      = Field(..., min_length=1, description="last name is required.")
    user_name:  str      = Field(..., min_length=1, max_length=120, description="username is required.")
    email:      EmailStr = Field(..., description="email is required.")
    password:   str      = Field(..., min_length=1, description="password is required.")
    birthday:   date     = Field(..., description="Date of birth (YYYY-MM-DD)")
    bio:        str      = Field(..., min_length=1, description="bio is required.")

    @field_validator("birthday")
    @classmethod
    def _check_minimum_age(cls, v: date) -> date:
        if age_on(v, date.today()) < MINIMUM_AGE:
            raise ValueError("Age below 18 can't sign-up!")
        return v


class SignInRequest(CamelModel):
    """
    Sign-in request
    - userName or email (userName wins when both are given) plus password
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"userName": "ab1", "password": "x"}
        },
    )

    user_name: Optional[str] = Field(None, description="Username")
    email:     Optional[str] = Field(None, description="E-mail")
    password:  str           = Field(..., min_length=1, description="password is required.")

    @field_validator("user_name", "email", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        return v or None

    @model_validator(mode="after")
    def _require_login_id(self) -> "SignInRequest":
        if not self.user_name and not self.email:
            raise ValueError("username or email is required.")
        return self
