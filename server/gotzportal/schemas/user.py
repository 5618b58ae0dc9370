"""User and authentication Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

MIN_PASSWORD_LENGTH = 8


class LoginUser(BaseModel):
    id: int
    name: Optional[str] = None
    email: str


class LoginResponse(BaseModel):
    """Body of a successful login; ``token`` is the admin bearer secret."""

    token: str
    user: LoginUser


class RegisteredUser(BaseModel):
    id: int
    email: str
    name: str


class RegisterResponse(BaseModel):
    message: str = "Account created."
    user: RegisteredUser


class AdminUser(BaseModel):
    """User row as listed in the admin console; never carries the hash."""

    id: int
    email: str
    name: Optional[str] = None
    role: str
    created_at: Optional[str] = None


class NewUser(BaseModel):
    """Validated account data for registration and admin user creation."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    name: Optional[str] = Field(None, max_length=255)
    role: str = Field("admin", min_length=1, max_length=32)
