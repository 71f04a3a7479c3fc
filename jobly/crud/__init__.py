"""
CRUD operations (Create, Read, Update, Delete) over the relational store.

This layer builds parameterized SQL and returns plain dicts keyed by API
field names, keeping the API routes free of SQL.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
