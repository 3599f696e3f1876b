"""
Database module - relational store handle and table definitions.
"""
from app.db.database import Database, metadata, students, users

__all__ = [
    "Database",
    "metadata",
    "students",
    "users"
]
