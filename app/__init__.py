"""
Teacher Dashboard API
Roster management backend for the teacher desktop app.

Architecture:
- Relational store (SQLite by default): students and login accounts
- JWT bearer auth in front of every roster and analytics route
- Uniform response envelope for success and failure alike
"""

__version__ = "1.0.0"
