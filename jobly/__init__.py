"""
Jobly API

REST backend for companies, jobs and users with dynamic filtering
and partial updates over PostgreSQL.
"""

__version__ = "1.0.0"
