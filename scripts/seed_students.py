#!/usr/bin/env python3
"""
Demo Data Seeder

Creates the schema (plus bootstrap account) and adds a handful of students
through the repository, so the usual validation applies.
Usage: python scripts/seed_students.py
"""
import logging
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.core.exceptions import ConflictException
from app.core.logging import setup_logging
from app.db.database import Database
from app.services.student_repository import StudentRepository

logger = logging.getLogger("seed")

STUDENTS = [
    {"name": "Ana Lee", "email": "ana.lee@school.edu", "subject": "Math", "grade": 95},
    {"name": "Bo Kim", "email": "bo.kim@school.edu", "subject": "Math", "grade": 85},
    {"name": "Carla Diaz", "email": "carla.diaz@school.edu", "subject": "Science", "grade": 78},
    {"name": "Dev Patel", "email": "dev.patel@school.edu", "subject": "English", "grade": 88},
    {"name": "Emma Stone", "email": "emma.stone@school.edu", "subject": "History", "grade": 91},
    {"name": "Farid Haddad", "email": "farid.haddad@school.edu", "subject": "Science", "grade": 67},
]


def seed_data() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    db = Database(settings.database_url)
    db.init_schema(settings.admin_username, settings.admin_password)
    repo = StudentRepository(db)

    created = 0
    for student in STUDENTS:
        try:
            repo.create(student)
            created += 1
        except ConflictException:
            # Already seeded on a previous run
            logger.info(f"Skipping {student['email']}, already present")

    logger.info(f"✅ Seeded {created} student(s)")
    db.dispose()


if __name__ == "__main__":
    seed_data()
