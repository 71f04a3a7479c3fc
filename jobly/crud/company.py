"""
CRUD operations for companies.

Rows come back keyed by their API names (numEmployees, logoUrl) so the API
layer can validate them straight into response schemas.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from jobly.core.config import settings
from jobly.core.database import fetch_all, fetch_one
from jobly.core.errors import DuplicateError, NotFoundError
from jobly.core.filters import build_filter_clause, check_range, company_filters
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

# API field name -> column name, for fields whose names differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = ('handle, name, description, '
                   'num_employees AS "numEmployees", logo_url AS "logoUrl"')


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        DuplicateError: If the handle is already taken
    """
    handle = data["handle"]
    duplicate = fetch_one(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if duplicate:
        raise DuplicateError(f"Duplicate company: {handle}")

    company = fetch_one(
        db,
        f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [handle, data["name"], data["description"], data.get("numEmployees"), data.get("logoUrl")]
    )
    db.commit()

    logger.info(f"Created company {handle}")
    return company


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return every company ordered by name."""
    return fetch_all(db, f"SELECT {COMPANY_COLUMNS} FROM companies ORDER BY name")


def filter_by(db: Session, query: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Find companies matching query-string filters.

    Accepted filters: minEmployees, maxEmployees, companyName
    (case-insensitive partial match).

    Raises:
        InvalidRangeError: If minEmployees is greater than maxEmployees
        UnknownFilterError: If a key is not an accepted filter
        InvalidFilterValueError: If a filter value has the wrong type
        NotFoundError: If nothing matches and FILTER_EMPTY_AS_NOT_FOUND is set
    """
    check_range(query, "minEmployees", "maxEmployees")
    clause = build_filter_clause(query, company_filters(settings.FILTER_ALLOW_ZERO))

    companies = fetch_all(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE {clause.sql}
            ORDER BY name""",
        clause.params
    )
    if not companies and settings.FILTER_EMPTY_AS_NOT_FOUND:
        raise NotFoundError("There aren't any companies matching your requirements")

    return companies


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Return a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity, companyHandle}, ...]

    Raises:
        NotFoundError: If the company does not exist
    """
    rows = fetch_all(
        db,
        """SELECT c.handle,
                  c.name,
                  c.description,
                  c.num_employees AS "numEmployees",
                  c.logo_url AS "logoUrl",
                  j.id,
                  j.title,
                  j.salary,
                  j.equity,
                  j.company_handle AS "companyHandle"
           FROM companies AS c
           LEFT JOIN jobs AS j ON c.handle = j.company_handle
           WHERE c.handle = $1
           ORDER BY j.id""",
        [handle]
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    first = rows[0]
    company = {key: first[key] for key in ("handle", "name", "description", "numEmployees", "logoUrl")}
    # A company without jobs yields one row of NULL job columns
    company["jobs"] = [
        {key: row[key] for key in ("id", "title", "salary", "equity", "companyHandle")}
        for row in rows
        if row["id"] is not None
    ]
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the fields present in data change.

    Args:
        db: Database session
        handle: Company handle
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        NoDataError: If data is empty
        NotFoundError: If the company does not exist
    """
    partial = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = f"${len(partial.values) + 1}"

    company = fetch_one(
        db,
        f"""UPDATE companies
            SET {partial.set_cols}
            WHERE handle = {handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*partial.values, handle]
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company.

    Raises:
        NotFoundError: If the company does not exist
    """
    deleted = fetch_one(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not deleted:
        raise NotFoundError(f"No company: {handle}")
    db.commit()

    logger.info(f"Deleted company {handle}")
