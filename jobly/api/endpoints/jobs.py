from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.crud import job as job_crud
from jobly.schemas.job import JobCreateRequest, JobUpdateRequest, JobResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job posting for an existing company.

    Returns 404 if companyHandle does not name a company.
    """
    return job_crud.create(db, request.model_dump(by_alias=True))


@router.get("/", response_model=List[JobResponse])
def list_jobs(db: Session = Depends(get_db)):
    """List all jobs ordered by title."""
    return job_crud.find_all(db)


@router.get("/filter", response_model=List[JobResponse])
def filter_jobs(request: Request, db: Session = Depends(get_db)):
    """
    Search jobs with query-string filters.

    Accepted filters:
    - jobTitle: case-insensitive partial match on title
    - minSalary: integer lower bound on salary
    - hasEquity: "true" for jobs with equity of 1, "false" for any equity

    Any other parameter is rejected with 400. Returns 404 when nothing matches.
    """
    return job_crud.filter_by(db, dict(request.query_params))


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job.

    Fields can be: title, salary, equity.
    """
    return job_crud.update(db, job_id, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{job_id}", status_code=204)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.
    """
    job_crud.remove(db, job_id)
    return None
