"""
Database connectivity for ddlkit.

This package provides:
- Connection configuration parsed from postgresql:// URLs
- An asyncpg backed connection pool

PostgreSQL metadata scans live in ddlkit.database.introspection.
"""

from .connection import ConnectionConfig, ConnectionPool

__all__ = [
    "ConnectionConfig",
    "ConnectionPool",
]
