"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Emptiness checks are left to the domain service so the transport reports
them with the same stable error as any other caller.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    username: str = Field(..., description="Requested username (case-sensitive)")
    password: str = Field(..., description="Plaintext password, hashed before storage")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
