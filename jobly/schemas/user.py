"""
Pydantic schemas for User API requests/responses.

Passwords are accepted on input and never returned.
"""

from pydantic import EmailStr, Field, field_validator
from typing import List, Optional

from jobly.schemas.base import CamelModel, UpdateModel, reject_null


class UserCreateRequest(CamelModel):
    """Request schema for adding a user."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    is_admin: bool = False


class UserUpdateRequest(UpdateModel):
    """Request schema for a partial user update. The username cannot change."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None

    @field_validator("first_name", "last_name", "password", "email", "is_admin")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class UserResponse(CamelModel):
    """User profile response (no sensitive data)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class ApplicationResponse(CamelModel):
    """Response after applying to a job."""
    applied: int
