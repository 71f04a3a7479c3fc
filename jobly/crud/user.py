"""
CRUD operations for users and their job applications.

Stored passwords are bcrypt hashes; no function here returns them.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from jobly.core.database import execute, fetch_all, fetch_one
from jobly.core.errors import DuplicateError, NotFoundError
from jobly.core.security import get_password_hash
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_COLUMNS = ('username, first_name AS "firstName", last_name AS "lastName", '
                'email, is_admin AS "isAdmin"')


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Add a user with a hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin}

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        DuplicateError: If the username is already taken
    """
    username = data["username"]
    duplicate = fetch_one(db, "SELECT username FROM users WHERE username = $1", [username])
    if duplicate:
        raise DuplicateError(f"Duplicate username: {username}")

    user = fetch_one(
        db,
        f"""INSERT INTO users
                (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            username,
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            data.get("isAdmin", False),
        ]
    )
    db.commit()

    logger.info(f"Registered user {username}")
    return user


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return every user ordered by username."""
    return fetch_all(db, f"SELECT {USER_COLUMNS} FROM users ORDER BY username")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Return a user with the ids of the jobs they applied to.

    Raises:
        NotFoundError: If the user does not exist
    """
    user = fetch_one(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
    if not user:
        raise NotFoundError(f"No user: {username}")

    applications = fetch_all(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username]
    )
    user["jobs"] = [row["job_id"] for row in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user; only the fields present in data change.

    A new password is hashed before it is stored.

    Args:
        db: Database session
        username: Username to update
        data: Any of {firstName, lastName, password, email, isAdmin}

    Raises:
        NoDataError: If data is empty
        NotFoundError: If the user does not exist
    """
    data = dict(data)
    if data.get("password") is not None:
        data["password"] = get_password_hash(data["password"])

    partial = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = f"${len(partial.values) + 1}"

    user = fetch_one(
        db,
        f"""UPDATE users
            SET {partial.set_cols}
            WHERE username = {username_idx}
            RETURNING {USER_COLUMNS}""",
        [*partial.values, username]
    )
    if not user:
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If the user does not exist
    """
    deleted = fetch_one(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not deleted:
        raise NotFoundError(f"No user: {username}")
    db.commit()

    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the user or the job does not exist
        DuplicateError: If the user already applied to the job
    """
    if not fetch_one(db, "SELECT id FROM jobs WHERE id = $1", [job_id]):
        raise NotFoundError(f"No job: {job_id}")
    if not fetch_one(db, "SELECT username FROM users WHERE username = $1", [username]):
        raise NotFoundError(f"No user: {username}")

    existing = fetch_one(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id]
    )
    if existing:
        raise DuplicateError(f"{username} already applied to job {job_id}")

    execute(db, "INSERT INTO applications (username, job_id) VALUES ($1, $2)", [username, job_id])
    db.commit()

    logger.info(f"User {username} applied to job {job_id}")
