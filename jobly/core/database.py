import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from jobly.core.config import settings
from jobly.core.sql import to_named_params

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,
    max_overflow=20
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Imports the models so their tables are registered on Base.metadata, and
    creates missing tables when CREATE_TABLES is set.
    """
    from jobly.models import company, job, user  # noqa: F401
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Created missing database tables")


def execute(db: Session, sql: str, values: Sequence[Any] = ()):
    """
    Run SQL written with positional $n placeholders.

    Args:
        db: Database session
        sql: SQL text, e.g. "SELECT handle FROM companies WHERE handle = $1"
        values: Values for $1, $2, ... in order

    Returns:
        SQLAlchemy result
    """
    named_sql, params = to_named_params(sql, values)
    logger.debug(f"Executing SQL: {' '.join(named_sql.split())} | params={params}")
    return db.execute(text(named_sql), params)


def fetch_all(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """Run a query and return every row as a dict."""
    return [dict(row) for row in execute(db, sql, values).mappings().all()]


def fetch_one(db: Session, sql: str, values: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
    """Run a query and return the first row as a dict, or None."""
    row = execute(db, sql, values).mappings().first()
    return dict(row) if row is not None else None
