"""
Student Repository - CRUD over the students table.

All statements are parameterized `text()` SQL. Partial updates are built
from a fixed field -> assignment mapping, never from client-supplied keys.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import DateTime, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import ConflictException, NotFoundException, StoreError, ValidationError
from app.db.database import Database
from app.schemas.schemas import SUBJECT_ERROR, StudentCreate, StudentUpdate, Subject

logger = logging.getLogger(__name__)

STUDENT_COLUMNS = "id, name, email, subject, grade, created_at"

# Field mask -> column assignment. The only place an UPDATE's SET clause comes from.
UPDATE_ASSIGNMENTS = {
    "name": "name = :name",
    "email": "email = :email",
    "subject": "subject = :subject",
    "grade": "grade = :grade",
}


def _student_query(sql: str):
    # created_at comes back from SQLite as text; type it so rows carry datetimes
    return text(sql).columns(created_at=DateTime)


def _parse(model, data):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


def parse_subject(subject: Optional[Union[str, Subject]]) -> Optional[Subject]:
    if subject is None or isinstance(subject, Subject):
        return subject
    try:
        return Subject(subject)
    except ValueError:
        raise ValidationError([{"field": "subject", "message": SUBJECT_ERROR}])


class StudentRepository:

    def __init__(self, db: Database):
        self.db = db

    def list(self, subject: Optional[Union[str, Subject]] = None) -> List[dict]:
        """All students, newest first, optionally restricted to one subject."""
        subject = parse_subject(subject)

        sql = f"SELECT {STUDENT_COLUMNS} FROM students"
        params = {}
        if subject is not None:
            sql += " WHERE subject = :subject"
            params["subject"] = subject.value
        sql += " ORDER BY created_at DESC, id DESC"

        try:
            with self.db.session() as session:
                result = session.execute(_student_query(sql), params)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to list students: {e}")
            raise StoreError("Failed to retrieve students")

    def get(self, student_id: int) -> dict:
        try:
            with self.db.session() as session:
                row = session.execute(
                    _student_query(f"SELECT {STUDENT_COLUMNS} FROM students WHERE id = :id"),
                    {"id": student_id}
                ).mappings().first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load student {student_id}: {e}")
            raise StoreError("Failed to retrieve student")

        if row is None:
            raise NotFoundException("Student not found")
        return dict(row)

    def create(self, data: Union[StudentCreate, Mapping[str, Any]]) -> dict:
        """Validate every field, insert, and return the persisted row."""
        student = _parse(StudentCreate, data)

        try:
            with self.db.session() as session:
                row = session.execute(
                    _student_query(f"""
                        INSERT INTO students (name, email, subject, grade)
                        VALUES (:name, :email, :subject, :grade)
                        RETURNING {STUDENT_COLUMNS}
                    """),
                    {
                        "name": student.name,
                        "email": str(student.email),
                        "subject": student.subject.value,
                        "grade": student.grade,
                    }
                ).mappings().one()
                created = dict(row)
        except IntegrityError:
            raise ConflictException("Email already exists")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create student: {e}")
            raise StoreError("Failed to create student")

        logger.info(f"Created student {created['id']} ({created['subject']})")
        return created

    def update(self, student_id: int, patch: Union[StudentUpdate, Mapping[str, Any]]) -> dict:
        """
        Apply a sparse patch and return the full updated row.

        Only the supplied fields are validated and written. An empty patch is
        rejected before touching the store; the write itself is one
        conditional UPDATE, so a missing row and the write cannot race.
        """
        if isinstance(patch, Mapping):
            patch = {k: v for k, v in patch.items() if k in UPDATE_ASSIGNMENTS}
        update = _parse(StudentUpdate, patch)
        changes = update.changes()

        if not changes:
            raise ValidationError([{"field": "body", "message": "No fields to update"}])

        assignments = [UPDATE_ASSIGNMENTS[field] for field in UPDATE_ASSIGNMENTS if field in changes]
        params = dict(changes, id=student_id)

        try:
            with self.db.session() as session:
                row = session.execute(
                    _student_query(
                        f"UPDATE students SET {', '.join(assignments)} "
                        f"WHERE id = :id RETURNING {STUDENT_COLUMNS}"
                    ),
                    params
                ).mappings().first()
                updated = dict(row) if row is not None else None
        except IntegrityError:
            raise ConflictException("Email already exists")
        except SQLAlchemyError as e:
            logger.error(f"Failed to update student {student_id}: {e}")
            raise StoreError("Failed to update student")

        if updated is None:
            raise NotFoundException("Student not found")

        logger.info(f"Updated student {student_id}: {', '.join(sorted(changes))}")
        return updated

    def delete(self, student_id: int) -> None:
        try:
            with self.db.session() as session:
                result = session.execute(
                    text("DELETE FROM students WHERE id = :id"),
                    {"id": student_id}
                )
                deleted = result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete student {student_id}: {e}")
            raise StoreError("Failed to delete student")

        if deleted == 0:
            raise NotFoundException("Student not found")

        logger.info(f"Deleted student {student_id}")
