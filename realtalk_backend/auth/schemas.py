from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator


DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]


class RegisterRequest(BaseModel):
    """Public self-serve registration.

    organization_name is optional; when given, the new user becomes the owner of
    a freshly created organization.
    """

    email: EmailStr
    password: str = Field(min_length=8)
    full_name: DisplayName
    organization_name: Optional[DisplayName] = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.strip().lower()
