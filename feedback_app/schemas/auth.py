"""Pydantic schemas for admin registration, login and profile management."""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from feedback_app.schemas.base import CamelModel


class _EmailModel(CamelModel):
    """Lower-cases the ``email`` field so lookups are case-insensitive."""

    @field_validator("email", check_fields=False)
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AdminRegister(_EmailModel):
    """Registration request.

    Example:
        {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "password": "s3cret-pass",
            "mobileNumber": "+15551234567",
            "bio": "Runs the monthly meetup"
        }
    """

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1)
    mobile_number: Optional[str] = Field(None, max_length=32)
    bio: Optional[str] = None


class AdminLogin(_EmailModel):
    """Login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordChange(CamelModel):
    """Password change request for the authenticated admin."""

    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class ProfileUpdate(_EmailModel):
    """Profile update request. Name and email are always required."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    mobile_number: Optional[str] = Field(None, max_length=32)
    bio: Optional[str] = None


class AdminOut(CamelModel):
    """Public view of an admin account (never includes the password hash)."""

    id: int
    name: str
    email: str
    mobile_number: Optional[str] = None
    bio: Optional[str] = None


class AdminSummary(CamelModel):
    """Owner summary embedded in session listings."""

    id: int
    name: str
    email: str


class AuthResponse(CamelModel):
    """Response to a successful registration or login."""

    message: str
    token: str
    admin: AdminOut


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str
