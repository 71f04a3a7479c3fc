from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest, CompanyUpdateRequest, CompanyResponse, CompanyDetailResponse
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company.

    Returns 400 if the handle is already taken.
    """
    return company_crud.create(db, request.model_dump(by_alias=True))


@router.get("/", response_model=List[CompanyResponse])
def list_companies(db: Session = Depends(get_db)):
    """List all companies ordered by name."""
    return company_crud.find_all(db)


@router.get("/filter", response_model=List[CompanyResponse])
def filter_companies(request: Request, db: Session = Depends(get_db)):
    """
    Search companies with query-string filters.

    Accepted filters:
    - minEmployees: integer lower bound on employee count
    - maxEmployees: integer upper bound on employee count
    - companyName: case-insensitive partial match on name

    Any other parameter is rejected with 400, as is minEmployees > maxEmployees.
    Returns 404 when nothing matches.
    """
    return company_crud.filter_by(db, dict(request.query_params))


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and the jobs it has posted."""
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company.

    Fields can be: name, description, numEmployees, logoUrl.
    An empty body is rejected with 400.
    """
    return company_crud.update(db, handle, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{handle}", status_code=204)
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    return None
