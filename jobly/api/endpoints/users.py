"""
User management endpoints.

Adding a user here is an administrative action, not self-registration.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserCreateRequest, UserUpdateRequest, UserResponse, UserDetailResponse, ApplicationResponse
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", status_code=201, response_model=UserResponse)
def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    """Add a user. The new user may be an admin."""
    return user_crud.register(db, request.model_dump(by_alias=True))


@router.get("/", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(username: str, db: Session = Depends(get_db)):
    """Retrieve a user and the ids of the jobs they applied to."""
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse)
def update_user(username: str, request: UserUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a user.

    Fields can be: firstName, lastName, password, email, isAdmin.
    """
    return user_crud.update(db, username, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{username}", status_code=204)
def delete_user(username: str, db: Session = Depends(get_db)):
    """Delete a user and their applications."""
    user_crud.remove(db, username)
    return None


@router.post("/{username}/jobs/{job_id}", status_code=201, response_model=ApplicationResponse)
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """Apply a user to a job."""
    user_crud.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=job_id)
