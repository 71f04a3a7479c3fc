"""
Pydantic schemas for Company API requests/responses.
"""

from pydantic import Field, field_validator
from typing import List, Optional

from jobly.schemas.base import CamelModel, UpdateModel, reject_null
from jobly.schemas.job import JobResponse


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(UpdateModel):
    """Schema for a partial company update. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with the jobs it has posted."""
    jobs: List[JobResponse] = []
