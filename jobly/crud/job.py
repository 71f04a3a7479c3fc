"""
CRUD operations for jobs.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from jobly.core.config import settings
from jobly.core.database import fetch_all, fetch_one
from jobly.core.errors import NotFoundError
from jobly.core.filters import build_filter_clause, job_filters
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        NotFoundError: If the company does not exist
    """
    company_handle = data["companyHandle"]
    company = fetch_one(db, "SELECT handle FROM companies WHERE handle = $1", [company_handle])
    if not company:
        raise NotFoundError(f"No company: {company_handle}")

    job = fetch_one(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), company_handle]
    )
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} at {company_handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return every job ordered by title."""
    return fetch_all(db, f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title")


def filter_by(db: Session, query: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Find jobs matching query-string filters.

    Accepted filters: jobTitle (case-insensitive partial match), minSalary,
    hasEquity ("true" for jobs with full equity, "false" for all jobs).

    Raises:
        UnknownFilterError: If a key is not an accepted filter
        InvalidFilterValueError: If a filter value has the wrong type
        NotFoundError: If nothing matches and FILTER_EMPTY_AS_NOT_FOUND is set
    """
    clause = build_filter_clause(query, job_filters(settings.FILTER_ALLOW_ZERO))

    jobs = fetch_all(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE {clause.sql}
            ORDER BY title""",
        clause.params
    )
    if not jobs and settings.FILTER_EMPTY_AS_NOT_FOUND:
        raise NotFoundError("There aren't any jobs matching your requirements")

    return jobs


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Return a job by id.

    Raises:
        NotFoundError: If the job does not exist
    """
    job = fetch_one(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the fields present in data change.

    Args:
        db: Database session
        job_id: Job ID to update
        data: Any of {title, salary, equity}

    Raises:
        NoDataError: If data is empty
        NotFoundError: If the job does not exist
    """
    partial = sql_for_partial_update(data, {})
    id_idx = f"${len(partial.values) + 1}"

    job = fetch_one(
        db,
        f"""UPDATE jobs
            SET {partial.set_cols}
            WHERE id = {id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*partial.values, job_id]
    )
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If the job does not exist
    """
    deleted = fetch_one(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not deleted:
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Deleted job {job_id}")
