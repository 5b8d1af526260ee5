import uuid
from typing import Annotated

from pydantic import EmailStr, StringConstraints, field_validator

from taskboard.schemas.base import APIModel, UTCDateTime


UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class UserRegister(APIModel):
    """Schema for registering a new account."""
    name: UserName
    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=6)]

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, value: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password cannot be longer than 72 bytes")
        return value


class UserLogin(APIModel):
    """Schema for logging in."""
    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=1)]

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserRead(APIModel):
    """Public view of a user."""
    id: uuid.UUID
    name: str
    email: str
    created_at: UTCDateTime


class AuthResponse(APIModel):
    """Issued credential plus the user it belongs to."""
    token: str
    user: UserRead
