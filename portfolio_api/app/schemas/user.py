"""
Pydantic models for account data.

Defines the payloads for registration and login and the shape in which
accounts are returned.  The stored password hash is never part of
``UserRead`` unless the compatibility switch
``EXPOSE_PASSWORD_HASH`` is enabled (see ``UserService.serialize``).
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: str = Field(..., examples=["user@example.com"])
    password: str = Field(..., examples=["strongpassword"])


class UserLogin(BaseModel):
    email: str = Field(..., examples=["user@example.com"])
    password: str = Field(..., examples=["strongpassword"])


class UserRead(BaseModel):
    """Schema for reading an account from the API."""

    id: str
    name: Optional[str] = None
    email: str
    password: Optional[str] = Field(
        None,
        description="bcrypt hash; only present when EXPOSE_PASSWORD_HASH is enabled",
    )
