from __future__ import annotations

import re
from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

_USERNAME_RE = re.compile(r"[A-Za-z0-9_.-]+")
_SPECIAL_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>_\-+=\[\]\\\/;'`~]")


def _check_username(value: str) -> str:
    if not _USERNAME_RE.fullmatch(value):
        raise PydanticCustomError(
            "username_invalid_chars",
            "Username may contain only letters, digits, '.', '_' and '-'",
            {"pattern": _USERNAME_RE.pattern},
        )
    return value


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    date_of_birth: date
    password: str = Field(min_length=8, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("missing", "Name is required", {})
        return value

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: date) -> date:
        if value >= datetime.now(UTC).date():
            raise PydanticCustomError(
                "date_of_birth_future", "Date of birth must be in the past", {}
            )
        return value

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if not re.search(r"[A-Z]", value):
            raise PydanticCustomError(
                "password_no_uppercase",
                "Password must contain at least one uppercase letter",
                {},
            )

        if not re.search(r"[a-z]", value):
            raise PydanticCustomError(
                "password_no_lowercase",
                "Password must contain at least one lowercase letter",
                {},
            )

        if not re.search(r"\d", value):
            raise PydanticCustomError(
                "password_no_digit",
                "Password must contain at least one digit",
                {},
            )

        if not _SPECIAL_RE.search(value):
            raise PydanticCustomError(
                "password_no_special",
                "Password must contain at least one special character",
                {},
            )

        return value


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)  # No strength check on login


class UserDTO(BaseModel):
    id: int
    username: str
    name: str
    email: str
    date_of_birth: date
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthSuccessDTO(BaseModel):
    ok: bool = True
    user: UserDTO | None = None
