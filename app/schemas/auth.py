"""Request/response schemas for signup and login."""

from datetime import datetime

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """
    New account details. Fields are optional at the schema level so the route
    can answer a missing field with its own 400 message instead of a generic one.
    """

    email: str | None = Field(default=None, description="Email address (case-insensitive)")
    password: str | None = Field(default=None, description="Password")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    company: str | None = Field(default=None, description="Optional company name")

    class Config:
        populate_by_name = True


class CreatedUser(BaseModel):
    """Public subset of a new user. Never includes the password hash."""

    email: str
    first_name: str
    last_name: str
    created_at: datetime

    class Config:
        from_attributes = True


class SignupResponse(BaseModel):
    message: str = "User created successfully."
    user: CreatedUser


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class TokenResponse(BaseModel):
    """Signed session token returned after successful login."""

    message: str = "Login successful."
    token: str = Field(..., description="Send as Authorization: Bearer <token>")


class MessageResponse(BaseModel):
    """Error body shape shared by every endpoint."""

    message: str
